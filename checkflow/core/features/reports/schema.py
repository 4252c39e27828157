# (c) Copyright Datacraft, 2026
"""Pydantic models for job reports."""
from datetime import date

from pydantic import BaseModel, Field

from checkflow.core.types import JobStatus


class StatusCounts(BaseModel):
	total: int = 0
	by_status: dict[JobStatus, int] = Field(default_factory=dict)
	awaiting_review: int = 0
	open: int = 0

	def count(self, status: JobStatus) -> int:
		return self.by_status.get(status, 0)


class BreakdownRow(BaseModel):
	key: str
	label: str
	total: int
	approved: int
	open: int


class JobReport(BaseModel):
	date_from: date | None = None
	date_to: date | None = None
	counts: StatusCounts
	approval_rate: int = Field(0, description="Approved share of all jobs, percent")
	auto_ok_rate: int = Field(0, description="Auto-OK share of recognized-and-unreviewed jobs, percent")
	by_office: list[BreakdownRow] = []
	by_template: list[BreakdownRow] = []
