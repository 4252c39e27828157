# (c) Copyright Datacraft, 2026
"""Abstract recognizer interface."""
from abc import ABC, abstractmethod

from checkflow.core.features.print_jobs.schema import PrintJob
from checkflow.core.features.templates.schema import TemplateVersion

from .schema import RecognitionResult, Scan


class ExtractionError(Exception):
	"""The scan could not be read at all (e.g. identifying code unreadable)."""
	pass


class Recognizer(ABC):
	"""Extracts per-item checked state from a scanned checklist.

	Implementations return a result with one item per checklist item of
	``version``. Extraction failure is reported either by returning a
	result with status ERROR and an ``error_reason`` or by raising
	:class:`ExtractionError`. Any other verdict returned is advisory: the
	engine recomputes it from the confidences.
	"""

	name: str = "base"

	@abstractmethod
	async def recognize(
		self,
		job: PrintJob,
		scan: Scan,
		version: TemplateVersion,
	) -> RecognitionResult:
		pass
