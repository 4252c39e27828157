# (c) Copyright Datacraft, 2026
"""ORM model for offices."""
from sqlalchemy import String, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column

from checkflow.core.db.base import Base


class OfficeRow(Base):
	__tablename__ = "offices"

	id: Mapped[str] = mapped_column(String(36), primary_key=True)
	name: Mapped[str] = mapped_column(String(255))
	code: Mapped[str] = mapped_column(String(20), unique=True)
	address: Mapped[str] = mapped_column(String(500), default="")
	is_active: Mapped[bool] = mapped_column(Boolean, default=True)
	manager_ids: Mapped[list] = mapped_column(JSON, default=list)
	template_ids: Mapped[list] = mapped_column(JSON, default=list)
