# (c) Copyright Datacraft, 2026
"""Tests for the verdict policy and confidence helpers."""
import pytest
from pydantic import ValidationError

from checkflow.core.features.recognition.policy import (
    ConfidenceBand,
    VerdictPolicy,
    overall_confidence,
)
from checkflow.core.features.recognition.schema import RecognizedItem
from checkflow.core.types import Verdict


def items(*confidences):
    return [
        RecognizedItem(item_id=f"item-{idx}", is_checked=True, confidence=c)
        for idx, c in enumerate(confidences)
    ]


def test_classify_auto_ok():
    assert VerdictPolicy().classify(items(70, 85, 99)) == Verdict.AUTO_OK


def test_classify_need_review_below_threshold():
    """Test that a single item under 70 forces manual review."""
    assert VerdictPolicy().classify(items(95, 69, 99)) == Verdict.NEED_REVIEW


def test_classify_extraction_failed():
    assert VerdictPolicy().classify(items(99), extraction_failed=True) == Verdict.ERROR


def test_custom_threshold():
    policy = VerdictPolicy(review_threshold=90)
    assert policy.classify(items(89)) == Verdict.NEED_REVIEW
    assert [i.confidence for i in policy.low_confidence_items(items(89, 95))] == [89]


@pytest.mark.parametrize("confidence,band", [
    (100, ConfidenceBand.HIGH),
    (90, ConfidenceBand.HIGH),
    (89, ConfidenceBand.MEDIUM),
    (70, ConfidenceBand.MEDIUM),
    (69, ConfidenceBand.LOW),
    (0, ConfidenceBand.LOW),
])
def test_confidence_bands(confidence, band):
    assert VerdictPolicy().band(confidence) == band


def test_overall_confidence():
    assert overall_confidence(items(80, 90, 95)) == 88
    assert overall_confidence([]) == 0


@pytest.mark.parametrize("raw,expected", [
    (150, 100),
    (-5, 0),
    (72.6, 73),
    ("64", 64),
])
def test_confidence_is_clamped(raw, expected):
    item = RecognizedItem(item_id="item-1", is_checked=False, confidence=raw)
    assert item.confidence == expected


def test_confidence_must_be_numeric():
    with pytest.raises(ValidationError):
        RecognizedItem(item_id="item-1", is_checked=False, confidence="high")
