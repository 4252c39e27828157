# (c) Copyright Datacraft, 2026
"""ORM models for checklist templates and their versions."""
from datetime import datetime

from sqlalchemy import String, Integer, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from checkflow.core.db.base import Base


class ChecklistTemplateRow(Base):
	__tablename__ = "checklist_templates"

	id: Mapped[str] = mapped_column(String(36), primary_key=True)
	name: Mapped[str] = mapped_column(String(255))
	type: Mapped[str] = mapped_column(String(20))
	description: Mapped[str] = mapped_column(String(2000), default="")
	status: Mapped[str] = mapped_column(String(20), default="draft")
	current_version_id: Mapped[str | None] = mapped_column(String(36))


class TemplateVersionRow(Base):
	"""Sections are stored as one JSON document and never rewritten."""
	__tablename__ = "template_versions"
	__table_args__ = (UniqueConstraint("template_id", "version_number"),)

	id: Mapped[str] = mapped_column(String(36), primary_key=True)
	template_id: Mapped[str] = mapped_column(
		String(36),
		ForeignKey("checklist_templates.id", ondelete="CASCADE"),
		index=True,
	)
	version_number: Mapped[int] = mapped_column(Integer)
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
	created_by: Mapped[str] = mapped_column(String(36))
	status: Mapped[str] = mapped_column(String(20), default="draft")
	sections: Mapped[list] = mapped_column(JSON, default=list)
