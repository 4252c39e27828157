# (c) Copyright Datacraft, 2026
"""SQLAlchemy-backed persistence for the checklist store."""
import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from checkflow.core.db.base import Base
from checkflow.core.db.engine import make_session_factory
from checkflow.core.features.history.db.orm import HistoryEventRow
from checkflow.core.features.history.schema import HistoryEvent
from checkflow.core.features.offices.db.orm import OfficeRow
from checkflow.core.features.offices.schema import Office
from checkflow.core.features.print_jobs.db.orm import PrintJobRow
from checkflow.core.features.print_jobs.schema import PrintJob
from checkflow.core.features.templates.db.orm import ChecklistTemplateRow, TemplateVersionRow
from checkflow.core.features.templates.schema import ChecklistTemplate, TemplateVersion
from checkflow.core.store import Persistence, StoreSnapshot

logger = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
	# SQLite hands back naive datetimes
	if value.tzinfo is None:
		return value.replace(tzinfo=timezone.utc)
	return value


class SqlPersistence(Persistence):
	"""Loads and flushes the store through the ORM.

	Flushing upserts every record. Rows are never deleted, and history
	rows are only inserted, never rewritten.
	"""

	def __init__(self, engine: AsyncEngine, create_schema: bool = True):
		self.engine = engine
		self.session_factory = make_session_factory(engine)
		self.create_schema = create_schema

	async def load(self) -> StoreSnapshot:
		if self.create_schema:
			async with self.engine.begin() as conn:
				await conn.run_sync(Base.metadata.create_all)

		async with self.session_factory() as session:
			templates = await self._load_templates(session)
			offices = [
				Office(
					id=row.id,
					name=row.name,
					code=row.code,
					address=row.address,
					is_active=row.is_active,
					manager_ids=tuple(row.manager_ids or ()),
					template_ids=tuple(row.template_ids or ()),
				)
				for row in (await session.execute(select(OfficeRow))).scalars().all()
			]
			jobs = await self._load_jobs(session)

		logger.info(
			f"Loaded {len(templates)} templates, {len(offices)} offices, "
			f"{len(jobs)} print jobs"
		)
		return StoreSnapshot(templates=templates, offices=offices, jobs=jobs)

	async def flush(self, snapshot: StoreSnapshot) -> None:
		async with self.session_factory() as session:
			for template in snapshot.templates:
				await session.merge(self._template_row(template))
			for office in snapshot.offices:
				await session.merge(self._office_row(office))
			for job in snapshot.jobs:
				await session.merge(self._job_row(job))
			await session.flush()

			for template in snapshot.templates:
				for version in template.versions:
					await session.merge(self._version_row(version))
			await self._insert_new_events(session, snapshot.jobs)
			await session.commit()
		logger.info(f"Flushed {len(snapshot.jobs)} print jobs")

	async def close(self) -> None:
		await self.engine.dispose()

	async def _load_templates(self, session: AsyncSession) -> list[ChecklistTemplate]:
		versions: dict[str, list[TemplateVersion]] = {}
		stmt = select(TemplateVersionRow).order_by(
			TemplateVersionRow.template_id,
			TemplateVersionRow.version_number,
		)
		for row in (await session.execute(stmt)).scalars().all():
			versions.setdefault(row.template_id, []).append(
				TemplateVersion(
					id=row.id,
					template_id=row.template_id,
					version_number=row.version_number,
					created_at=_aware(row.created_at),
					created_by=row.created_by,
					status=row.status,
					sections=row.sections,
				)
			)

		return [
			ChecklistTemplate(
				id=row.id,
				name=row.name,
				type=row.type,
				description=row.description,
				status=row.status,
				current_version_id=row.current_version_id,
				versions=tuple(versions.get(row.id, ())),
			)
			for row in (await session.execute(select(ChecklistTemplateRow))).scalars().all()
		]

	async def _load_jobs(self, session: AsyncSession) -> list[PrintJob]:
		history: dict[str, list[HistoryEvent]] = {}
		stmt = select(HistoryEventRow).order_by(HistoryEventRow.print_job_id, HistoryEventRow.seq)
		for row in (await session.execute(stmt)).scalars().all():
			history.setdefault(row.print_job_id, []).append(
				HistoryEvent(
					id=row.id,
					print_job_id=row.print_job_id,
					action=row.action,
					actor_id=row.actor_id,
					actor_name=row.actor_name,
					timestamp=_aware(row.timestamp),
					details=row.details,
				)
			)

		stmt = select(PrintJobRow).order_by(PrintJobRow.created_at)
		return [
			PrintJob(
				id=row.id,
				short_id=row.short_id,
				office_id=row.office_id,
				template_id=row.template_id,
				template_version_id=row.template_version_id,
				template_name=row.template_name,
				created_at=_aware(row.created_at),
				created_by=row.created_by,
				created_by_name=row.created_by_name,
				checklist_date=row.checklist_date,
				shift=row.shift,
				status=row.status,
				print_count=row.print_count,
				scan=row.scan,
				recognition_result=row.recognition_result,
				history=tuple(history.get(row.id, ())),
			)
			for row in (await session.execute(stmt)).scalars().all()
		]

	async def _insert_new_events(self, session: AsyncSession, jobs: list[PrintJob]) -> None:
		existing = set((await session.execute(select(HistoryEventRow.id))).scalars().all())
		for job in jobs:
			for seq, event in enumerate(job.history, start=1):
				if event.id in existing:
					continue
				session.add(HistoryEventRow(
					id=event.id,
					print_job_id=job.id,
					seq=seq,
					action=event.action.value,
					actor_id=event.actor_id,
					actor_name=event.actor_name,
					timestamp=event.timestamp,
					details=event.details,
				))

	@staticmethod
	def _template_row(template: ChecklistTemplate) -> ChecklistTemplateRow:
		return ChecklistTemplateRow(
			id=template.id,
			name=template.name,
			type=template.type.value,
			description=template.description,
			status=template.status.value,
			current_version_id=template.current_version_id,
		)

	@staticmethod
	def _version_row(version: TemplateVersion) -> TemplateVersionRow:
		return TemplateVersionRow(
			id=version.id,
			template_id=version.template_id,
			version_number=version.version_number,
			created_at=version.created_at,
			created_by=version.created_by,
			status=version.status.value,
			sections=[s.model_dump(mode="json") for s in version.sections],
		)

	@staticmethod
	def _office_row(office: Office) -> OfficeRow:
		return OfficeRow(
			id=office.id,
			name=office.name,
			code=office.code,
			address=office.address,
			is_active=office.is_active,
			manager_ids=list(office.manager_ids),
			template_ids=list(office.template_ids),
		)

	@staticmethod
	def _job_row(job: PrintJob) -> PrintJobRow:
		return PrintJobRow(
			id=job.id,
			short_id=job.short_id,
			office_id=job.office_id,
			template_id=job.template_id,
			template_version_id=job.template_version_id,
			template_name=job.template_name,
			created_at=job.created_at,
			created_by=job.created_by,
			created_by_name=job.created_by_name,
			checklist_date=job.checklist_date,
			shift=job.shift.value if job.shift else None,
			status=job.status.value,
			print_count=job.print_count,
			scan=job.scan.model_dump(mode="json") if job.scan else None,
			recognition_result=(
				job.recognition_result.model_dump(mode="json")
				if job.recognition_result else None
			),
		)
