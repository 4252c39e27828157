# (c) Copyright Datacraft, 2026
"""ORM model for history events."""
from datetime import datetime

from sqlalchemy import String, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from checkflow.core.db.base import Base


class HistoryEventRow(Base):
	"""Append-only; rows are inserted once and never updated or deleted."""
	__tablename__ = "history_events"

	id: Mapped[str] = mapped_column(String(36), primary_key=True)
	print_job_id: Mapped[str] = mapped_column(
		String(36),
		ForeignKey("print_jobs.id", ondelete="CASCADE"),
		index=True,
	)
	# Position in the job's ledger
	seq: Mapped[int] = mapped_column(Integer)
	action: Mapped[str] = mapped_column(String(30))
	actor_id: Mapped[str] = mapped_column(String(36))
	actor_name: Mapped[str] = mapped_column(String(255))
	timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True))
	details: Mapped[str] = mapped_column(Text, default="")
