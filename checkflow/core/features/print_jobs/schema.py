# (c) Copyright Datacraft, 2026
"""Pydantic models for print jobs."""
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from uuid_extensions import uuid7str

from checkflow.core.features.history.schema import HistoryEvent
from checkflow.core.features.recognition.schema import RecognitionResult, Scan
from checkflow.core.features.templates.schema import utcnow
from checkflow.core.types import JobStatus, Shift


class PrintJobCreate(BaseModel):
	model_config = ConfigDict(extra="forbid")

	template_id: str
	office_id: str
	checklist_date: date
	shift: Shift | None = None


class PrintJob(BaseModel):
	"""One dated, office-scoped instance of a checklist template.

	Instances are immutable values; every mutation produces a new instance
	through ``model_copy`` and replaces the previous one in the store.
	"""
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=uuid7str)
	short_id: str
	office_id: str
	template_id: str
	template_version_id: str
	template_name: str
	created_at: datetime = Field(default_factory=utcnow)
	created_by: str
	created_by_name: str
	checklist_date: date
	shift: Shift | None = None
	status: JobStatus = JobStatus.CREATED
	print_count: int = Field(default=1, ge=0)
	scan: Scan | None = None
	recognition_result: RecognitionResult | None = None
	history: tuple[HistoryEvent, ...] = ()


class PrintJobSummary(BaseModel):
	"""Row shape for job listings."""
	model_config = ConfigDict(from_attributes=True)

	id: str
	short_id: str
	office_id: str
	template_id: str
	template_name: str
	created_at: datetime
	created_by: str
	created_by_name: str
	checklist_date: date
	shift: Shift | None = None
	status: JobStatus
	print_count: int


class PrintJobList(BaseModel):
	items: list[PrintJobSummary]
	total: int
