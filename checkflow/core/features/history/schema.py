# (c) Copyright Datacraft, 2026
"""Pydantic models for the job history ledger."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from uuid_extensions import uuid7str

from checkflow.core.features.templates.schema import utcnow
from checkflow.core.types import HistoryAction


class HistoryEvent(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=uuid7str)
	print_job_id: str
	action: HistoryAction
	actor_id: str
	actor_name: str
	timestamp: datetime = Field(default_factory=utcnow)
	details: str = ""
