# (c) Copyright Datacraft, 2026
"""ORM model for print jobs."""
from datetime import date, datetime

from sqlalchemy import String, Integer, Date, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from checkflow.core.db.base import Base


class PrintJobRow(Base):
	__tablename__ = "print_jobs"

	id: Mapped[str] = mapped_column(String(36), primary_key=True)
	short_id: Mapped[str] = mapped_column(String(40), index=True)
	office_id: Mapped[str] = mapped_column(String(36), index=True)
	template_id: Mapped[str] = mapped_column(String(36), index=True)
	template_version_id: Mapped[str] = mapped_column(String(36))
	template_name: Mapped[str] = mapped_column(String(255))
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
	created_by: Mapped[str] = mapped_column(String(36))
	created_by_name: Mapped[str] = mapped_column(String(255))
	checklist_date: Mapped[date] = mapped_column(Date)
	shift: Mapped[str | None] = mapped_column(String(20))
	status: Mapped[str] = mapped_column(String(30), default="CREATED")
	print_count: Mapped[int] = mapped_column(Integer, default=1)
	scan: Mapped[dict | None] = mapped_column(JSON)
	recognition_result: Mapped[dict | None] = mapped_column(JSON)
