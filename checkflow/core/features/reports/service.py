# (c) Copyright Datacraft, 2026
"""Aggregate reporting over print job listings."""
import logging
from collections import Counter
from datetime import date
from typing import Iterable

from checkflow.core.features.print_jobs.schema import PrintJob
from checkflow.core.features.print_jobs.state import REVIEWABLE_STATUSES, TERMINAL_STATUSES
from checkflow.core.store import ChecklistStore
from checkflow.core.types import JobStatus

from .schema import BreakdownRow, JobReport, StatusCounts

logger = logging.getLogger(__name__)


def _percent(part: int, whole: int) -> int:
	return round(part * 100 / whole) if whole else 0


def _breakdown(
	jobs: list[PrintJob],
	key_of,
	label_of,
) -> list[BreakdownRow]:
	rows: dict[str, BreakdownRow] = {}
	for job in jobs:
		key = key_of(job)
		row = rows.get(key) or BreakdownRow(key=key, label=label_of(job), total=0, approved=0, open=0)
		row.total += 1
		if job.status == JobStatus.APPROVED:
			row.approved += 1
		elif job.status not in TERMINAL_STATUSES:
			row.open += 1
		rows[key] = row
	return sorted(rows.values(), key=lambda r: r.label)


def summarize_jobs(
	store: ChecklistStore,
	jobs: Iterable[PrintJob],
	date_from: date | None = None,
	date_to: date | None = None,
) -> JobReport:
	"""Status totals, rates and per-office / per-template breakdowns."""
	jobs = list(jobs)
	by_status = Counter(job.status for job in jobs)
	counts = StatusCounts(
		total=len(jobs),
		by_status=dict(by_status),
		awaiting_review=sum(by_status[s] for s in REVIEWABLE_STATUSES),
		open=sum(n for s, n in by_status.items() if s not in TERMINAL_STATUSES),
	)
	auto_ok = by_status[JobStatus.RECOGNIZED_AUTO_OK]
	need_review = by_status[JobStatus.RECOGNIZED_NEED_REVIEW]

	offices = {office.id: office for office in store.iter_offices()}

	def office_label(job: PrintJob) -> str:
		office = offices.get(job.office_id)
		return office.name if office else job.office_id

	report = JobReport(
		date_from=date_from,
		date_to=date_to,
		counts=counts,
		approval_rate=_percent(by_status[JobStatus.APPROVED], len(jobs)),
		auto_ok_rate=_percent(auto_ok, auto_ok + need_review),
		by_office=_breakdown(jobs, lambda j: j.office_id, office_label),
		by_template=_breakdown(jobs, lambda j: j.template_id, lambda j: j.template_name),
	)
	logger.debug(f"Report over {len(jobs)} jobs: approval rate {report.approval_rate}%")
	return report
