# (c) Copyright Datacraft, 2026
"""Review workflow: manual correction, approval and rejection."""
import logging
from typing import Sequence

from checkflow.core.auth import Actor, require_reviewer
from checkflow.core.exceptions import InvalidStateError, PreconditionError
from checkflow.core.features.history.service import append_event
from checkflow.core.features.print_jobs.schema import PrintJob
from checkflow.core.features.print_jobs.state import (
	ensure_transition,
	is_terminal,
)
from checkflow.core.features.recognition.schema import RecognizedItem
from checkflow.core.features.templates.schema import utcnow
from checkflow.core.store import ChecklistStore
from checkflow.core.types import HistoryAction, JobStatus

logger = logging.getLogger(__name__)


def _validate_items(
	store: ChecklistStore,
	job: PrintJob,
	items: Sequence[RecognizedItem],
) -> None:
	known = store.get_version(job.template_version_id).item_index()
	ids = [item.item_id for item in items]
	unknown = sorted(set(ids) - known.keys())
	if unknown:
		raise PreconditionError(
			f"Items not in the checklist version of {job.short_id}: {', '.join(unknown)}"
		)
	if len(ids) != len(set(ids)):
		raise PreconditionError(f"Duplicate item ids in correction of {job.short_id}")
	missing = [item_id for item_id in known if item_id not in ids]
	if missing:
		raise PreconditionError(
			f"Correction of {job.short_id} must cover every item; missing: {', '.join(missing)}"
		)


async def update_recognition_items(
	store: ChecklistStore,
	actor: Actor | None,
	job_id: str,
	items: Sequence[RecognizedItem],
) -> PrintJob:
	"""Replace the recognized items wholesale.

	The list must cover every item of the pinned version exactly once.
	Status is left unchanged.
	"""
	actor = require_reviewer(actor)
	async with store.job_lock(job_id):
		job = store.get_job(job_id)
		if is_terminal(job.status):
			raise InvalidStateError(
				f"Job {job.short_id} is {job.status.value}; its result is final"
			)
		result = job.recognition_result
		if result is None:
			raise PreconditionError(f"Job {job.short_id} has no recognition result yet")
		_validate_items(store, job, items)

		before = result.item_map()
		changed = sum(
			1 for item in items
			if before.get(item.item_id) is None
			or before[item.item_id].is_checked != item.is_checked
		)
		job = append_event(
			job,
			HistoryAction.MANUALLY_CORRECTED,
			actor,
			f"Recognition result corrected manually ({changed} item(s) changed)",
			recognition_result=result.model_copy(update={"items": tuple(items)}),
		)
		store.put_job(job)

	logger.info(f"Print job {job.short_id} corrected by {actor.id}")
	return job


async def _finalize(
	store: ChecklistStore,
	actor: Actor | None,
	job_id: str,
	target: JobStatus,
	action: HistoryAction,
	comment: str | None,
	default_details: str,
) -> PrintJob:
	actor = require_reviewer(actor)
	async with store.job_lock(job_id):
		job = store.get_job(job_id)
		ensure_transition(job.status, target)
		result = job.recognition_result
		if result is None:
			raise PreconditionError(f"Job {job.short_id} has no recognition result")

		job = append_event(
			job,
			action,
			actor,
			comment or default_details,
			status=target,
			recognition_result=result.model_copy(update={
				"confirmed_by": actor.id,
				"confirmed_at": utcnow(),
				"comment": comment,
			}),
		)
		store.put_job(job)

	logger.info(f"Print job {job.short_id} {target.value.lower()} by {actor.id}")
	return job


async def approve(
	store: ChecklistStore,
	actor: Actor | None,
	job_id: str,
	comment: str | None = None,
) -> PrintJob:
	return await _finalize(
		store, actor, job_id,
		JobStatus.APPROVED, HistoryAction.APPROVED,
		comment, "Checklist approved",
	)


async def reject(
	store: ChecklistStore,
	actor: Actor | None,
	job_id: str,
	comment: str | None = None,
) -> PrintJob:
	return await _finalize(
		store, actor, job_id,
		JobStatus.REJECTED, HistoryAction.REJECTED,
		comment, "Checklist rejected",
	)
