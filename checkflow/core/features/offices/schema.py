# (c) Copyright Datacraft, 2026
"""Pydantic models for offices."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from uuid_extensions import uuid7str


class OfficeBase(BaseModel):
	name: str = Field(..., min_length=1, max_length=255)
	code: str = Field(..., min_length=1, max_length=20)
	address: str = ""
	is_active: bool = True

	@field_validator("code")
	@classmethod
	def normalize_code(cls, v: str) -> str:
		v = v.strip().upper()
		if not v.isalnum():
			raise ValueError("Office code must be alphanumeric")
		return v


class OfficeCreate(OfficeBase):
	model_config = ConfigDict(extra="forbid")

	id: str | None = None
	manager_ids: list[str] = []
	template_ids: list[str] = []


class Office(OfficeBase):
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=uuid7str)
	manager_ids: tuple[str, ...] = ()
	template_ids: tuple[str, ...] = ()

	def enables(self, template_id: str) -> bool:
		return template_id in self.template_ids
