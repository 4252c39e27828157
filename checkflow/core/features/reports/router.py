# (c) Copyright Datacraft, 2026
"""FastAPI router for job reports."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends

from checkflow.core.auth import Actor, get_current_actor
from checkflow.core.deps import get_store
from checkflow.core.features.print_jobs.service import JobFilter, list_jobs
from checkflow.core.features.print_jobs.visibility import scope_filter
from checkflow.core.store import ChecklistStore

from . import service
from .schema import JobReport

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/summary", response_model=JobReport)
async def get_summary(
	actor: Annotated[Actor, Depends(get_current_actor)],
	store: Annotated[ChecklistStore, Depends(get_store)],
	office_id: str | None = None,
	date_from: date | None = None,
	date_to: date | None = None,
) -> JobReport:
	"""Status totals over the checklist date range, scoped to the actor."""
	job_filter = scope_filter(
		actor,
		JobFilter(date_from=date_from, date_to=date_to),
		selected_office_id=office_id,
	)
	return service.summarize_jobs(store, list_jobs(store, job_filter), date_from, date_to)
