# (c) Copyright Datacraft, 2026
"""Service layer for the checklist template catalog.

Versions are copy-on-write: revising a template always appends a new
version and moves the current pointer, so print jobs that pinned an older
version keep seeing exactly what was printed.
"""
import logging
from typing import Sequence

from uuid_extensions import uuid7str

from checkflow.core.auth import Actor, require_actor
from checkflow.core.exceptions import PreconditionError
from checkflow.core.store import ChecklistStore
from checkflow.core.types import TemplateStatus

from .schema import (
	ChecklistItem,
	ChecklistSection,
	ChecklistSectionIn,
	ChecklistTemplate,
	TemplateCreate,
	TemplateVersion,
)

logger = logging.getLogger(__name__)


def _build_sections(sections: Sequence[ChecklistSectionIn]) -> tuple[ChecklistSection, ...]:
	return tuple(
		ChecklistSection(
			id=section.id or uuid7str(),
			title=section.title,
			order=s_idx + 1,
			items=tuple(
				ChecklistItem(
					id=item.id or uuid7str(),
					text=item.text,
					is_required=item.is_required,
					order=i_idx + 1,
				)
				for i_idx, item in enumerate(section.items)
			),
		)
		for s_idx, section in enumerate(sections)
	)


async def create_template(
	store: ChecklistStore,
	actor: Actor | None,
	data: TemplateCreate,
) -> ChecklistTemplate:
	"""Create a draft template; sections, if given, become version 1."""
	actor = require_actor(actor)
	template_id = data.id or uuid7str()
	versions: tuple[TemplateVersion, ...] = ()
	if data.sections:
		versions = (
			TemplateVersion(
				template_id=template_id,
				version_number=1,
				created_by=actor.id,
				sections=_build_sections(data.sections),
			),
		)

	template = ChecklistTemplate(
		id=template_id,
		name=data.name,
		type=data.type,
		description=data.description,
		versions=versions,
		current_version_id=versions[0].id if versions else None,
	)
	async with store.catalog_lock:
		store.put_template(template)
	logger.info(f"Template created: {template.name} ({template.id})")
	return template


async def revise_template(
	store: ChecklistStore,
	actor: Actor | None,
	template_id: str,
	sections: Sequence[ChecklistSectionIn],
) -> TemplateVersion:
	"""Append a new version with ``sections`` and make it current."""
	actor = require_actor(actor)
	async with store.catalog_lock:
		template = store.get_template(template_id)
		if template.status == TemplateStatus.ARCHIVED:
			raise PreconditionError(f"Template {template_id} is archived")

		next_number = max((v.version_number for v in template.versions), default=0) + 1
		version = TemplateVersion(
			template_id=template.id,
			version_number=next_number,
			created_by=actor.id,
			status=template.status,
			sections=_build_sections(sections),
		)
		store.put_template(
			template.model_copy(update={
				"versions": (*template.versions, version),
				"current_version_id": version.id,
			})
		)
	logger.info(f"Template {template_id} revised to v{next_number}")
	return version


async def _set_status(
	store: ChecklistStore,
	template_id: str,
	status: TemplateStatus,
) -> ChecklistTemplate:
	async with store.catalog_lock:
		template = store.get_template(template_id)
		# Lifecycle status is metadata; section content stays untouched
		versions = tuple(
			v.model_copy(update={"status": status}) if v.id == template.current_version_id else v
			for v in template.versions
		)
		template = template.model_copy(update={"status": status, "versions": versions})
		store.put_template(template)
	logger.info(f"Template {template_id} is now {status.value}")
	return template


async def publish_template(store: ChecklistStore, template_id: str) -> ChecklistTemplate:
	template = store.get_template(template_id)
	if template.current_version_id is None:
		raise PreconditionError(f"Template {template_id} has no version to publish")
	return await _set_status(store, template_id, TemplateStatus.PUBLISHED)


async def archive_template(store: ChecklistStore, template_id: str) -> ChecklistTemplate:
	return await _set_status(store, template_id, TemplateStatus.ARCHIVED)


def get_current_version(store: ChecklistStore, template_id: str) -> TemplateVersion:
	template = store.get_template(template_id)
	if template.current_version_id is None:
		raise PreconditionError(f"Template {template_id} has no current version")
	return store.get_version(template.current_version_id)


def get_version(store: ChecklistStore, version_id: str) -> TemplateVersion:
	return store.get_version(version_id)


def list_templates(
	store: ChecklistStore,
	status: TemplateStatus | None = None,
) -> list[ChecklistTemplate]:
	templates = [t for t in store.iter_templates() if status is None or t.status == status]
	return sorted(templates, key=lambda t: t.name)
