# (c) Copyright Datacraft, 2026
"""In-process store for catalogs and print jobs.

Records are immutable pydantic values kept in id-keyed arenas. Writers
replace whole records while holding the lock for the record's scope
(per job, or per office for job creation); readers take no locks and
always see a complete record.
"""
import asyncio
import logging
import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator

from checkflow.core.exceptions import NotFoundError
from checkflow.core.features.offices.schema import Office
from checkflow.core.features.print_jobs.schema import PrintJob
from checkflow.core.features.templates.schema import (
	ChecklistTemplate,
	TemplateVersion,
)

logger = logging.getLogger(__name__)


@dataclass
class StoreSnapshot:
	"""Everything a persistence backend loads or flushes."""
	templates: list[ChecklistTemplate] = field(default_factory=list)
	offices: list[Office] = field(default_factory=list)
	jobs: list[PrintJob] = field(default_factory=list)


class Persistence(ABC):
	"""Abstract persistence backend for the store."""

	@abstractmethod
	async def load(self) -> StoreSnapshot:
		"""Load catalogs and jobs."""
		pass

	@abstractmethod
	async def flush(self, snapshot: StoreSnapshot) -> None:
		"""Persist the given snapshot."""
		pass

	async def close(self) -> None:
		"""Release backend resources."""
		pass


class MemoryPersistence(Persistence):
	"""Keeps the last flushed snapshot in memory."""

	def __init__(self, snapshot: StoreSnapshot | None = None):
		self.snapshot = snapshot or StoreSnapshot()

	async def load(self) -> StoreSnapshot:
		return StoreSnapshot(
			templates=list(self.snapshot.templates),
			offices=list(self.snapshot.offices),
			jobs=list(self.snapshot.jobs),
		)

	async def flush(self, snapshot: StoreSnapshot) -> None:
		self.snapshot = snapshot


class ChecklistStore:
	"""Repository of templates, offices and print jobs."""

	def __init__(self, persistence: Persistence | None = None):
		self.persistence = persistence or MemoryPersistence()
		self._templates: dict[str, ChecklistTemplate] = {}
		self._versions: dict[str, TemplateVersion] = {}
		self._offices: dict[str, Office] = {}
		self._jobs: dict[str, PrintJob] = {}
		# Locks live only while some coroutine holds or awaits them
		self._job_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()
		self._office_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()
		self._catalog_lock = asyncio.Lock()
		self.is_open = False

	async def open(self) -> None:
		snapshot = await self.persistence.load()
		for template in snapshot.templates:
			self.put_template(template)
		for office in snapshot.offices:
			self.put_office(office)
		for job in snapshot.jobs:
			self.put_job(job)
		self.is_open = True
		logger.info(
			f"Store opened: {len(self._templates)} templates, "
			f"{len(self._offices)} offices, {len(self._jobs)} print jobs"
		)

	async def flush(self) -> None:
		await self.persistence.flush(self.snapshot())

	async def close(self) -> None:
		await self.flush()
		await self.persistence.close()
		self.is_open = False
		logger.info("Store closed")

	def snapshot(self) -> StoreSnapshot:
		return StoreSnapshot(
			templates=list(self._templates.values()),
			offices=list(self._offices.values()),
			jobs=list(self._jobs.values()),
		)

	# Locks

	@staticmethod
	def _lock_for(locks: weakref.WeakValueDictionary, key: str) -> asyncio.Lock:
		lock = locks.get(key)
		if lock is None:
			lock = asyncio.Lock()
			locks[key] = lock
		return lock

	def job_lock(self, job_id: str) -> asyncio.Lock:
		return self._lock_for(self._job_locks, job_id)

	def office_lock(self, office_id: str) -> asyncio.Lock:
		return self._lock_for(self._office_locks, office_id)

	@property
	def catalog_lock(self) -> asyncio.Lock:
		return self._catalog_lock

	# Templates

	def put_template(self, template: ChecklistTemplate) -> None:
		self._templates[template.id] = template
		for version in template.versions:
			self._versions[version.id] = version

	def get_template(self, template_id: str) -> ChecklistTemplate:
		try:
			return self._templates[template_id]
		except KeyError:
			raise NotFoundError("Template", template_id)

	def get_version(self, version_id: str) -> TemplateVersion:
		try:
			return self._versions[version_id]
		except KeyError:
			raise NotFoundError("Template version", version_id)

	def iter_templates(self) -> Iterator[ChecklistTemplate]:
		return iter(list(self._templates.values()))

	# Offices

	def put_office(self, office: Office) -> None:
		self._offices[office.id] = office

	def get_office(self, office_id: str) -> Office:
		try:
			return self._offices[office_id]
		except KeyError:
			raise NotFoundError("Office", office_id)

	def iter_offices(self) -> Iterator[Office]:
		return iter(list(self._offices.values()))

	# Print jobs

	def put_job(self, job: PrintJob) -> None:
		self._jobs[job.id] = job

	def get_job(self, job_id: str) -> PrintJob:
		try:
			return self._jobs[job_id]
		except KeyError:
			raise NotFoundError("Print job", job_id)

	def jobs_snapshot(self) -> list[PrintJob]:
		return list(self._jobs.values())

	def count_office_jobs(self, office_id: str) -> int:
		return sum(1 for job in self._jobs.values() if job.office_id == office_id)
