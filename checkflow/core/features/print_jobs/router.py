# (c) Copyright Datacraft, 2026
"""FastAPI router for print jobs."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from checkflow.core.auth import Actor, get_current_actor
from checkflow.core.deps import get_recognition_engine, get_store
from checkflow.core.exceptions import NotFoundError
from checkflow.core.features.recognition.schema import RecognizedItemsUpdate, ScanUpload
from checkflow.core.features.recognition.service import RecognitionEngine
from checkflow.core.features.review import service as review_service
from checkflow.core.features.review.schema import ReviewDecision
from checkflow.core.store import ChecklistStore
from checkflow.core.types import JobStatus

from . import service
from .schema import PrintJob, PrintJobCreate, PrintJobList, PrintJobSummary
from .visibility import is_visible, scope_filter

router = APIRouter(prefix="/print-jobs", tags=["print-jobs"])


def _visible_job(store: ChecklistStore, actor: Actor, job_id: str) -> PrintJob:
	job = store.get_job(job_id)
	if not is_visible(actor, job):
		raise NotFoundError("Print job", job_id)
	return job


@router.get("", response_model=PrintJobList)
async def list_print_jobs(
	actor: Annotated[Actor, Depends(get_current_actor)],
	store: Annotated[ChecklistStore, Depends(get_store)],
	status_: Annotated[JobStatus | None, Query(alias="status")] = None,
	template_id: str | None = None,
	office_id: str | None = None,
	q: str | None = None,
	date_from: date | None = None,
	date_to: date | None = None,
	page: Annotated[int, Query(ge=1)] = 1,
	page_size: Annotated[int, Query(ge=1, le=500)] = 50,
) -> PrintJobList:
	"""List print jobs visible to the current actor, newest first."""
	job_filter = scope_filter(
		actor,
		service.JobFilter(
			status=status_,
			template_id=template_id,
			search=q,
			date_from=date_from,
			date_to=date_to,
		),
		selected_office_id=office_id,
	)
	listing = service.list_jobs(store, job_filter)
	return PrintJobList(
		items=[PrintJobSummary.model_validate(job) for job in listing.page(page, page_size)],
		total=len(listing),
	)


@router.post("", response_model=PrintJob, status_code=status.HTTP_201_CREATED)
async def create_print_job(
	data: PrintJobCreate,
	actor: Annotated[Actor, Depends(get_current_actor)],
	store: Annotated[ChecklistStore, Depends(get_store)],
) -> PrintJob:
	return await service.create_job(store, actor, data)


@router.get("/{job_id}", response_model=PrintJob)
async def get_print_job(
	job_id: str,
	actor: Annotated[Actor, Depends(get_current_actor)],
	store: Annotated[ChecklistStore, Depends(get_store)],
) -> PrintJob:
	return _visible_job(store, actor, job_id)


@router.post("/{job_id}/print", response_model=PrintJob)
async def print_print_job(
	job_id: str,
	actor: Annotated[Actor, Depends(get_current_actor)],
	store: Annotated[ChecklistStore, Depends(get_store)],
) -> PrintJob:
	_visible_job(store, actor, job_id)
	return await service.print_job(store, actor, job_id)


@router.post("/{job_id}/scan", response_model=PrintJob, status_code=status.HTTP_202_ACCEPTED)
async def upload_scan(
	job_id: str,
	upload: ScanUpload,
	actor: Annotated[Actor, Depends(get_current_actor)],
	store: Annotated[ChecklistStore, Depends(get_store)],
	engine: Annotated[RecognitionEngine, Depends(get_recognition_engine)],
) -> PrintJob:
	"""Attach a scan; recognition continues in the background."""
	_visible_job(store, actor, job_id)
	await engine.submit_scan(actor, job_id, upload)
	return store.get_job(job_id)


@router.put("/{job_id}/recognition/items", response_model=PrintJob)
async def replace_recognition_items(
	job_id: str,
	data: RecognizedItemsUpdate,
	actor: Annotated[Actor, Depends(get_current_actor)],
	store: Annotated[ChecklistStore, Depends(get_store)],
) -> PrintJob:
	_visible_job(store, actor, job_id)
	return await review_service.update_recognition_items(store, actor, job_id, data.items)


@router.post("/{job_id}/approve", response_model=PrintJob)
async def approve_print_job(
	job_id: str,
	decision: ReviewDecision,
	actor: Annotated[Actor, Depends(get_current_actor)],
	store: Annotated[ChecklistStore, Depends(get_store)],
) -> PrintJob:
	_visible_job(store, actor, job_id)
	return await review_service.approve(store, actor, job_id, decision.comment)


@router.post("/{job_id}/reject", response_model=PrintJob)
async def reject_print_job(
	job_id: str,
	decision: ReviewDecision,
	actor: Annotated[Actor, Depends(get_current_actor)],
	store: Annotated[ChecklistStore, Depends(get_store)],
) -> PrintJob:
	_visible_job(store, actor, job_id)
	return await review_service.reject(store, actor, job_id, decision.comment)
