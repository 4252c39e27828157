# (c) Copyright Datacraft, 2026
"""Verdict policy for recognition results."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from checkflow.core.types import Verdict

from .schema import RecognizedItem


class ConfidenceBand(str, Enum):
	HIGH = "high"
	MEDIUM = "medium"
	LOW = "low"


@dataclass(frozen=True)
class VerdictPolicy:
	"""Maps per-item confidences to a verdict.

	ERROR when extraction failed; otherwise NEED_REVIEW when at least one
	item is below ``review_threshold``; otherwise AUTO_OK.
	"""
	review_threshold: int = 70
	high_threshold: int = 90

	def classify(
		self,
		items: Iterable[RecognizedItem],
		extraction_failed: bool = False,
	) -> Verdict:
		if extraction_failed:
			return Verdict.ERROR
		if self.low_confidence_items(items):
			return Verdict.NEED_REVIEW
		return Verdict.AUTO_OK

	def low_confidence_items(self, items: Iterable[RecognizedItem]) -> list[RecognizedItem]:
		return [item for item in items if item.confidence < self.review_threshold]

	def band(self, confidence: int) -> ConfidenceBand:
		if confidence >= self.high_threshold:
			return ConfidenceBand.HIGH
		if confidence >= self.review_threshold:
			return ConfidenceBand.MEDIUM
		return ConfidenceBand.LOW


def overall_confidence(items: Iterable[RecognizedItem]) -> int:
	"""Rounded mean confidence, 0 for an empty result."""
	values = [item.confidence for item in items]
	if not values:
		return 0
	return round(sum(values) / len(values))
