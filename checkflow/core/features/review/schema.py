# (c) Copyright Datacraft, 2026
"""Pydantic models for review decisions."""
from pydantic import BaseModel, ConfigDict, Field


class ReviewDecision(BaseModel):
	model_config = ConfigDict(extra="forbid")

	comment: str | None = Field(None, max_length=2000)
