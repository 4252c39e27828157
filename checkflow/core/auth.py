# (c) Copyright Datacraft, 2026
"""Actor context for checklist operations.

Identity is established by an upstream proxy. The core only needs to know
who is acting and which role they hold, so the actor is read from the
remote-user headers configured in settings.
"""
from fastapi import Request
from pydantic import BaseModel, ConfigDict, Field

from checkflow.core.config import Settings, get_settings
from checkflow.core.exceptions import UnauthenticatedError, UnauthorizedError
from checkflow.core.types import UserRole

SYSTEM_ACTOR_ID = "system"
SYSTEM_ACTOR_NAME = "System"


class Actor(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str = Field(..., min_length=1)
	name: str
	role: UserRole = UserRole.EMPLOYEE
	office_ids: tuple[str, ...] = ()

	@property
	def is_reviewer(self) -> bool:
		return self.role in (UserRole.MANAGER, UserRole.ADMIN)


def require_actor(actor: Actor | None) -> Actor:
	if actor is None:
		raise UnauthenticatedError("No actor context")
	return actor


def require_reviewer(actor: Actor | None) -> Actor:
	actor = require_actor(actor)
	if not actor.is_reviewer:
		raise UnauthorizedError(
			f"Role '{actor.role.value}' may not review checklists"
		)
	return actor


def _split_header(value: str | None) -> list[str]:
	if not value:
		return []
	return [part.strip() for part in value.split(",") if part.strip()]


def _resolve_role(roles: list[str]) -> UserRole:
	known = {role.value: role for role in UserRole}
	resolved = [known[r.lower()] for r in roles if r.lower() in known]
	if UserRole.ADMIN in resolved:
		return UserRole.ADMIN
	if UserRole.MANAGER in resolved:
		return UserRole.MANAGER
	return UserRole.EMPLOYEE


def actor_from_headers(request: Request, settings: Settings) -> Actor:
	user_id = request.headers.get(settings.remote_user_header)
	if not user_id:
		raise UnauthenticatedError(
			f"Missing {settings.remote_user_header} header"
		)
	return Actor(
		id=user_id,
		name=request.headers.get(settings.remote_name_header) or user_id,
		role=_resolve_role(
			_split_header(request.headers.get(settings.remote_roles_header))
		),
		office_ids=tuple(
			_split_header(request.headers.get(settings.remote_offices_header))
		),
	)


async def get_current_actor(request: Request) -> Actor:
	settings = getattr(request.app.state, "settings", None) or get_settings()
	return actor_from_headers(request, settings)
