# (c) Copyright Datacraft, 2026
"""Pydantic models for scans and recognition results."""
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from uuid_extensions import uuid7str

from checkflow.core.features.templates.schema import utcnow
from checkflow.core.types import ScanProcessingStatus, Verdict


def clamp_confidence(v: int | float | str) -> int:
	try:
		value = float(v)
	except (TypeError, ValueError):
		raise ValueError(f"Confidence must be a number, got {v!r}")
	return max(0, min(100, int(round(value))))


Confidence = Annotated[int, BeforeValidator(clamp_confidence)]


class Scan(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=uuid7str)
	print_job_id: str
	office_id: str
	uploaded_by: str
	uploaded_at: datetime = Field(default_factory=utcnow)
	file_name: str
	file_ref: str
	processing_status: ScanProcessingStatus = ScanProcessingStatus.RECEIVED


class ScanUpload(BaseModel):
	"""What the upload collaborator hands over for a scanned sheet."""
	model_config = ConfigDict(extra="forbid")

	file_name: str = Field(..., min_length=1)
	file_ref: str = Field(..., min_length=1)


class RecognizedItem(BaseModel):
	model_config = ConfigDict(frozen=True)

	item_id: str
	is_checked: bool
	confidence: Confidence


class RecognitionResult(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=uuid7str)
	scan_id: str
	print_job_id: str
	items: tuple[RecognizedItem, ...] = ()
	status: Verdict
	error_reason: str | None = None
	confirmed_by: str | None = None
	confirmed_at: datetime | None = None
	comment: str | None = None

	def item_map(self) -> dict[str, RecognizedItem]:
		return {item.item_id: item for item in self.items}


class RecognizedItemsUpdate(BaseModel):
	model_config = ConfigDict(extra="forbid")

	items: list[RecognizedItem]
