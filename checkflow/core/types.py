# (c) Copyright Datacraft, 2026
"""Shared enumerations for the checklist lifecycle."""
from enum import Enum


class UserRole(str, Enum):
	EMPLOYEE = "employee"
	MANAGER = "manager"
	ADMIN = "admin"


class ChecklistType(str, Enum):
	OPENING = "opening"
	CLOSING = "closing"
	WEEKLY = "weekly"
	DAILY = "daily"


class TemplateStatus(str, Enum):
	DRAFT = "draft"
	PUBLISHED = "published"
	ARCHIVED = "archived"


class Shift(str, Enum):
	MORNING = "morning"
	EVENING = "evening"


class JobStatus(str, Enum):
	"""Print job lifecycle status."""
	CREATED = "CREATED"
	SCAN_RECEIVED = "SCAN_RECEIVED"
	RECOGNIZED_AUTO_OK = "RECOGNIZED_AUTO_OK"
	RECOGNIZED_NEED_REVIEW = "RECOGNIZED_NEED_REVIEW"
	RECOGNIZED_ERROR = "RECOGNIZED_ERROR"
	APPROVED = "APPROVED"
	REJECTED = "REJECTED"


class Verdict(str, Enum):
	"""Coarse outcome of a recognition pass."""
	AUTO_OK = "AUTO_OK"
	NEED_REVIEW = "NEED_REVIEW"
	ERROR = "ERROR"


class ScanProcessingStatus(str, Enum):
	RECEIVED = "received"
	PROCESSED = "processed"
	ERROR = "error"


class HistoryAction(str, Enum):
	CREATED = "created"
	PRINTED = "printed"
	REPRINTED = "reprinted"
	SCAN_UPLOADED = "scan_uploaded"
	RECOGNIZED = "recognized"
	MANUALLY_CORRECTED = "manually_corrected"
	APPROVED = "approved"
	REJECTED = "rejected"
