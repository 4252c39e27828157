# (c) Copyright Datacraft, 2026
"""Role-based job visibility.

Employees see the jobs they created, managers the jobs of their assigned
offices, admins everything (optionally narrowed to a selected office).
The rule only reads ``created_by`` and ``office_id`` from the job.
"""
from dataclasses import replace

from checkflow.core.auth import Actor
from checkflow.core.types import UserRole

from .schema import PrintJob
from .service import JobFilter


def scope_filter(
	actor: Actor,
	job_filter: JobFilter | None = None,
	selected_office_id: str | None = None,
) -> JobFilter:
	"""Return a copy of ``job_filter`` narrowed to what ``actor`` may see."""
	scoped = replace(job_filter) if job_filter is not None else JobFilter()
	if selected_office_id is not None:
		scoped = replace(scoped, office_id=selected_office_id)

	if actor.role == UserRole.EMPLOYEE:
		scoped = replace(scoped, created_by=actor.id)
	elif actor.role == UserRole.MANAGER:
		scoped = replace(scoped, office_ids=frozenset(actor.office_ids))
	return scoped


def is_visible(actor: Actor, job: PrintJob) -> bool:
	if actor.role == UserRole.ADMIN:
		return True
	if actor.role == UserRole.MANAGER:
		return job.office_id in actor.office_ids
	return job.created_by == actor.id
