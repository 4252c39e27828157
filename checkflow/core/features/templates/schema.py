# (c) Copyright Datacraft, 2026
"""Pydantic models for checklist templates."""
from datetime import datetime, timezone
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator
from uuid_extensions import uuid7str

from checkflow.core.types import ChecklistType, TemplateStatus


def utcnow() -> datetime:
	return datetime.now(timezone.utc)


class ChecklistItem(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=uuid7str)
	text: str = Field(..., min_length=1)
	is_required: bool = True
	order: int = 0


class ChecklistSection(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=uuid7str)
	title: str
	order: int = 0
	items: tuple[ChecklistItem, ...] = ()


class TemplateVersion(BaseModel):
	"""Immutable snapshot of a template's sections.

	Item ids are the join key for recognition results, so they must be
	unique across all sections of one version.
	"""
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=uuid7str)
	template_id: str
	version_number: int = Field(..., ge=1)
	created_at: datetime = Field(default_factory=utcnow)
	created_by: str
	status: TemplateStatus = TemplateStatus.DRAFT
	sections: tuple[ChecklistSection, ...] = ()

	@model_validator(mode="after")
	def check_unique_item_ids(self) -> "TemplateVersion":
		seen: set[str] = set()
		for section in self.sections:
			for item in section.items:
				if item.id in seen:
					raise ValueError(f"Duplicate checklist item id: {item.id}")
				seen.add(item.id)
		return self

	def iter_items(self) -> Iterator[ChecklistItem]:
		"""Yield items in display order (section order, then item order)."""
		for section in sorted(self.sections, key=lambda s: s.order):
			yield from sorted(section.items, key=lambda i: i.order)

	def item_index(self) -> dict[str, ChecklistItem]:
		return {item.id: item for item in self.iter_items()}


class ChecklistTemplate(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=uuid7str)
	name: str = Field(..., min_length=1, max_length=255)
	type: ChecklistType
	description: str = ""
	status: TemplateStatus = TemplateStatus.DRAFT
	current_version_id: str | None = None
	versions: tuple[TemplateVersion, ...] = ()

	@model_validator(mode="after")
	def check_current_version(self) -> "ChecklistTemplate":
		if self.current_version_id is not None and not any(
			v.id == self.current_version_id for v in self.versions
		):
			raise ValueError(
				f"current_version_id {self.current_version_id} is not a version "
				f"of template {self.id}"
			)
		return self

	@property
	def current_version(self) -> TemplateVersion | None:
		for version in self.versions:
			if version.id == self.current_version_id:
				return version
		return None


class ChecklistItemIn(BaseModel):
	model_config = ConfigDict(extra="forbid")

	id: str | None = None
	text: str = Field(..., min_length=1)
	is_required: bool = True


class ChecklistSectionIn(BaseModel):
	model_config = ConfigDict(extra="forbid")

	id: str | None = None
	title: str = Field(..., min_length=1)
	items: list[ChecklistItemIn] = []


class TemplateCreate(BaseModel):
	model_config = ConfigDict(extra="forbid")

	id: str | None = None
	name: str = Field(..., min_length=1, max_length=255)
	type: ChecklistType
	description: str = ""
	sections: list[ChecklistSectionIn] = []
