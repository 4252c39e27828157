# (c) Copyright Datacraft, 2026
"""Service layer for the office catalog."""
import logging

from uuid_extensions import uuid7str

from checkflow.core.auth import Actor
from checkflow.core.exceptions import PreconditionError
from checkflow.core.store import ChecklistStore
from checkflow.core.types import UserRole

from .schema import Office, OfficeCreate

logger = logging.getLogger(__name__)


async def create_office(store: ChecklistStore, data: OfficeCreate) -> Office:
	"""Create an office. Codes are unique since they prefix job short ids."""
	async with store.catalog_lock:
		if any(o.code == data.code for o in store.iter_offices()):
			raise PreconditionError(f"Office code already in use: {data.code}")
		for template_id in data.template_ids:
			store.get_template(template_id)

		office = Office(
			id=data.id or uuid7str(),
			name=data.name,
			code=data.code,
			address=data.address,
			is_active=data.is_active,
			manager_ids=tuple(data.manager_ids),
			template_ids=tuple(data.template_ids),
		)
		store.put_office(office)
	logger.info(f"Office created: {office.code} ({office.id})")
	return office


async def enable_template(
	store: ChecklistStore,
	office_id: str,
	template_id: str,
) -> Office:
	async with store.catalog_lock:
		office = store.get_office(office_id)
		store.get_template(template_id)
		if office.enables(template_id):
			return office
		office = office.model_copy(
			update={"template_ids": (*office.template_ids, template_id)}
		)
		store.put_office(office)
	logger.info(f"Template {template_id} enabled for office {office.code}")
	return office


def offices_for(store: ChecklistStore, actor: Actor) -> list[Office]:
	"""Offices an actor works with: admins see all, others their assigned ones."""
	offices = list(store.iter_offices())
	if actor.role != UserRole.ADMIN:
		offices = [o for o in offices if o.id in actor.office_ids]
	return sorted(offices, key=lambda o: o.code)
