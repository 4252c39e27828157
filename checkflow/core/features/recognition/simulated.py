# (c) Copyright Datacraft, 2026
"""Simulated recognizer used in place of real OCR.

Outcomes are drawn from a seedable generator so runs are reproducible.
"""
import logging
import random

from checkflow.core.features.print_jobs.schema import PrintJob
from checkflow.core.features.templates.schema import TemplateVersion
from checkflow.core.types import Verdict

from .base import Recognizer
from .schema import RecognitionResult, RecognizedItem, Scan

logger = logging.getLogger(__name__)

UNREADABLE_CODE_REASON = "Identification code not found or damaged"


class SimulatedRecognizer(Recognizer):
	"""Randomized stand-in for a vision pipeline.

	A fraction ``error_rate`` of scans fail extraction, a fraction
	``review_rate`` come back with middling confidences (40-79) and the
	rest with high confidences (80-99).
	"""

	name = "simulated"

	def __init__(
		self,
		seed: int | None = None,
		error_rate: float = 0.2,
		review_rate: float = 0.3,
		checked_rate: float = 0.8,
	):
		if error_rate + review_rate > 1:
			raise ValueError("error_rate + review_rate must not exceed 1")
		self._rng = random.Random(seed)
		self.error_rate = error_rate
		self.review_rate = review_rate
		self.checked_rate = checked_rate

	async def recognize(
		self,
		job: PrintJob,
		scan: Scan,
		version: TemplateVersion,
	) -> RecognitionResult:
		roll = self._rng.random()
		if roll >= 1 - self.error_rate:
			logger.debug(f"Simulated extraction failure for scan {scan.id[:8]}...")
			return RecognitionResult(
				scan_id=scan.id,
				print_job_id=job.id,
				status=Verdict.ERROR,
				error_reason=UNREADABLE_CODE_REASON,
			)

		uncertain = roll >= 1 - self.error_rate - self.review_rate
		low, high = (40, 79) if uncertain else (80, 99)
		items = tuple(
			RecognizedItem(
				item_id=item.id,
				is_checked=self._rng.random() < self.checked_rate,
				confidence=self._rng.randint(low, high),
			)
			for item in version.iter_items()
		)
		return RecognitionResult(
			scan_id=scan.id,
			print_job_id=job.id,
			items=items,
			status=Verdict.NEED_REVIEW if uncertain else Verdict.AUTO_OK,
		)
