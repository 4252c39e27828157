# (c) Copyright Datacraft, 2026
"""Append-only history ledger attached to each print job."""
import logging
from typing import Iterator, TYPE_CHECKING

from checkflow.core.auth import Actor, SYSTEM_ACTOR_ID, SYSTEM_ACTOR_NAME
from checkflow.core.features.templates.schema import utcnow
from checkflow.core.types import HistoryAction

from .schema import HistoryEvent

if TYPE_CHECKING:
	from checkflow.core.features.print_jobs.schema import PrintJob

logger = logging.getLogger(__name__)


def make_event(
	job: "PrintJob",
	action: HistoryAction,
	actor: Actor | None,
	details: str = "",
) -> HistoryEvent:
	"""Build the next event for ``job``.

	Timestamps never go backwards within one job's ledger, even if the
	wall clock does.
	"""
	timestamp = utcnow()
	if job.history and job.history[-1].timestamp > timestamp:
		timestamp = job.history[-1].timestamp
	return HistoryEvent(
		print_job_id=job.id,
		action=action,
		actor_id=actor.id if actor else SYSTEM_ACTOR_ID,
		actor_name=actor.name if actor else SYSTEM_ACTOR_NAME,
		timestamp=timestamp,
		details=details,
	)


def append_event(
	job: "PrintJob",
	action: HistoryAction,
	actor: Actor | None,
	details: str = "",
	**changes,
) -> "PrintJob":
	"""Return a copy of ``job`` with ``changes`` applied and one event appended."""
	event = make_event(job, action, actor, details)
	logger.debug(f"History {job.id[:8]}... +{action.value}: {details}")
	return job.model_copy(update={**changes, "history": (*job.history, event)})


def iter_events(
	job: "PrintJob",
	action: HistoryAction | None = None,
) -> Iterator[HistoryEvent]:
	for event in job.history:
		if action is None or event.action == action:
			yield event


def last_event(job: "PrintJob") -> HistoryEvent | None:
	return job.history[-1] if job.history else None
