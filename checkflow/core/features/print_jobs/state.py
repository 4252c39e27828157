# (c) Copyright Datacraft, 2026
"""Print job status state machine."""
from checkflow.core.exceptions import InvalidStateError
from checkflow.core.types import JobStatus, Verdict

TRANSITIONS: dict[JobStatus, frozenset[JobStatus]] = {
	JobStatus.CREATED: frozenset({JobStatus.SCAN_RECEIVED}),
	JobStatus.SCAN_RECEIVED: frozenset({
		JobStatus.RECOGNIZED_AUTO_OK,
		JobStatus.RECOGNIZED_NEED_REVIEW,
		JobStatus.RECOGNIZED_ERROR,
	}),
	JobStatus.RECOGNIZED_AUTO_OK: frozenset({JobStatus.APPROVED, JobStatus.REJECTED}),
	JobStatus.RECOGNIZED_NEED_REVIEW: frozenset({JobStatus.APPROVED, JobStatus.REJECTED}),
	# Re-scan after a failed recognition
	JobStatus.RECOGNIZED_ERROR: frozenset({JobStatus.SCAN_RECEIVED}),
	JobStatus.APPROVED: frozenset(),
	JobStatus.REJECTED: frozenset(),
}

TERMINAL_STATUSES = frozenset({JobStatus.APPROVED, JobStatus.REJECTED})

# Statuses that accept a (re-)scan
SCANNABLE_STATUSES = frozenset({JobStatus.CREATED, JobStatus.RECOGNIZED_ERROR})

# Statuses a reviewer may approve or reject from
REVIEWABLE_STATUSES = frozenset({
	JobStatus.RECOGNIZED_AUTO_OK,
	JobStatus.RECOGNIZED_NEED_REVIEW,
})

# Statuses in which a paper copy is still needed
PRINTABLE_STATUSES = SCANNABLE_STATUSES

VERDICT_STATUS: dict[Verdict, JobStatus] = {
	Verdict.AUTO_OK: JobStatus.RECOGNIZED_AUTO_OK,
	Verdict.NEED_REVIEW: JobStatus.RECOGNIZED_NEED_REVIEW,
	Verdict.ERROR: JobStatus.RECOGNIZED_ERROR,
}


def can_transition(source: JobStatus, target: JobStatus) -> bool:
	return target in TRANSITIONS[source]


def is_terminal(status: JobStatus) -> bool:
	return status in TERMINAL_STATUSES


def ensure_transition(source: JobStatus, target: JobStatus) -> None:
	if not can_transition(source, target):
		if is_terminal(source):
			raise InvalidStateError(
				f"Job is {source.value}; no further transitions are allowed"
			)
		raise InvalidStateError(
			f"Cannot move job from {source.value} to {target.value}"
		)
