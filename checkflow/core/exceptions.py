# (c) Copyright Datacraft, 2026
"""Errors raised by the checklist core."""


class ChecklistError(Exception):
	"""Base error for checklist operations."""
	pass


class NotFoundError(ChecklistError):
	"""Unknown template, version, office or job id."""

	def __init__(self, kind: str, object_id: str):
		self.kind = kind
		self.object_id = object_id
		super().__init__(f"{kind} not found: {object_id}")


class UnauthenticatedError(ChecklistError):
	"""No actor context was supplied."""
	pass


class UnauthorizedError(ChecklistError):
	"""Actor lacks the role required for the action."""
	pass


class InvalidStateError(ChecklistError):
	"""Operation is not permitted from the job's current status."""
	pass


class PreconditionError(InvalidStateError):
	"""A required precondition of the operation does not hold."""
	pass
