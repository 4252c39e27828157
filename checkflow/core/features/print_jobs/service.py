# (c) Copyright Datacraft, 2026
"""Job registry: creation, lookup, listing and printing of print jobs."""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterator

from checkflow.core.auth import Actor, require_actor
from checkflow.core.config import get_settings
from checkflow.core.exceptions import InvalidStateError, PreconditionError
from checkflow.core.features.history.service import append_event, iter_events
from checkflow.core.features.templates.service import get_current_version
from checkflow.core.store import ChecklistStore
from checkflow.core.types import HistoryAction, JobStatus

from .schema import PrintJob, PrintJobCreate
from .state import PRINTABLE_STATUSES

logger = logging.getLogger(__name__)


def _log_job_action(action: str, job: PrintJob) -> str:
	return f"Print job {action}: {job.short_id} ({job.id[:8]}...)"


def format_short_id(office_code: str, seq: int, padding: int | None = None) -> str:
	if padding is None:
		padding = get_settings().short_id_padding
	return f"{office_code}-{seq:0{padding}d}"


async def create_job(
	store: ChecklistStore,
	actor: Actor | None,
	data: PrintJobCreate,
) -> PrintJob:
	"""Create a print job pinned to the template's current version.

	The sequence part of the short id is the office's job count plus one,
	computed under the office lock so concurrent creations never collide.
	"""
	actor = require_actor(actor)
	template = store.get_template(data.template_id)
	office = store.get_office(data.office_id)
	if not office.enables(template.id):
		raise PreconditionError(
			f"Template '{template.name}' is not enabled for office {office.code}"
		)
	version = get_current_version(store, template.id)

	async with store.office_lock(office.id):
		seq = store.count_office_jobs(office.id) + 1
		job = PrintJob(
			short_id=format_short_id(office.code, seq),
			office_id=office.id,
			template_id=template.id,
			template_version_id=version.id,
			template_name=template.name,
			created_by=actor.id,
			created_by_name=actor.name,
			checklist_date=data.checklist_date,
			shift=data.shift,
			status=JobStatus.CREATED,
			print_count=1,
		)
		job = append_event(job, HistoryAction.CREATED, actor, "Checklist PDF generated")
		store.put_job(job)

	logger.info(_log_job_action("created", job))
	return job


def get_job(store: ChecklistStore, job_id: str) -> PrintJob:
	return store.get_job(job_id)


async def print_job(
	store: ChecklistStore,
	actor: Actor | None,
	job_id: str,
) -> PrintJob:
	"""Record a physical print.

	The first print is logged as ``printed``; every later one as
	``reprinted`` and counts towards ``print_count``.
	"""
	actor = require_actor(actor)
	async with store.job_lock(job_id):
		job = store.get_job(job_id)
		if job.status not in PRINTABLE_STATUSES:
			raise InvalidStateError(
				f"Job {job.short_id} is {job.status.value} and cannot be printed"
			)
		if next(iter_events(job, HistoryAction.PRINTED), None) is None:
			job = append_event(job, HistoryAction.PRINTED, actor, "Checklist printed")
		else:
			count = job.print_count + 1
			job = append_event(
				job,
				HistoryAction.REPRINTED,
				actor,
				f"Checklist reprinted (copy #{count})",
				print_count=count,
			)
		store.put_job(job)

	logger.info(_log_job_action("printed", job))
	return job


@dataclass
class JobFilter:
	"""Print job listing filter."""
	office_id: str | None = None
	office_ids: frozenset[str] | None = None
	status: JobStatus | None = None
	template_id: str | None = None
	created_by: str | None = None
	search: str | None = None
	date_from: date | None = None
	date_to: date | None = None

	# Sorting
	newest_first: bool = True

	def matches(self, job: PrintJob) -> bool:
		if self.office_id is not None and job.office_id != self.office_id:
			return False
		if self.office_ids is not None and job.office_id not in self.office_ids:
			return False
		if self.status is not None and job.status != self.status:
			return False
		if self.template_id is not None and job.template_id != self.template_id:
			return False
		if self.created_by is not None and job.created_by != self.created_by:
			return False
		if self.date_from is not None and job.checklist_date < self.date_from:
			return False
		if self.date_to is not None and job.checklist_date > self.date_to:
			return False
		if self.search:
			query = self.search.lower()
			haystack = (job.short_id, job.template_name, job.created_by_name)
			if not any(query in field.lower() for field in haystack):
				return False
		return True


class JobListing:
	"""Lazy, restartable view over a snapshot of print jobs.

	Each iteration starts over and filters on the fly; the snapshot is
	taken when the listing is created.
	"""

	def __init__(self, jobs: list[PrintJob], job_filter: JobFilter):
		self._jobs = sorted(
			jobs,
			key=lambda j: (j.created_at, j.id),
			reverse=job_filter.newest_first,
		)
		self.filter = job_filter

	def __iter__(self) -> Iterator[PrintJob]:
		return (job for job in self._jobs if self.filter.matches(job))

	def __len__(self) -> int:
		return sum(1 for _ in self)

	def page(self, page: int = 1, page_size: int = 50) -> list[PrintJob]:
		start = (page - 1) * page_size
		return [
			job for idx, job in enumerate(self)
			if start <= idx < start + page_size
		]


def list_jobs(store: ChecklistStore, job_filter: JobFilter | None = None) -> JobListing:
	return JobListing(store.jobs_snapshot(), job_filter or JobFilter())
