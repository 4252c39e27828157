# (c) Copyright Datacraft, 2026
"""Tests for print job creation, printing and listing."""
import asyncio
from datetime import date

import pytest

from checkflow.core.exceptions import (
    InvalidStateError,
    NotFoundError,
    PreconditionError,
    UnauthenticatedError,
)
from checkflow.core.features.print_jobs import service
from checkflow.core.features.print_jobs.schema import PrintJobCreate
from checkflow.core.features.templates.schema import ChecklistSectionIn, ChecklistItemIn
from checkflow.core.features.templates.service import revise_template
from checkflow.core.types import HistoryAction, JobStatus

from conftest import CHECKLIST_DATE, CTR_ID, DRAFT_ID, NRT_ID, OPENING_ID, OPENING_V1_ID, CLOSING_ID


@pytest.mark.asyncio
async def test_create_job_assigns_short_ids_per_office(make_print_job):
    """Test that the first two jobs of an office get CTR-001 and CTR-002."""
    first = await make_print_job()
    second = await make_print_job()
    north = await make_print_job(office_id=NRT_ID)

    assert first.short_id == "CTR-001"
    assert second.short_id == "CTR-002"
    assert north.short_id == "NRT-001"


@pytest.mark.asyncio
async def test_create_job_initial_state(make_print_job, store, employee):
    """Test the status, pinned version and single history event of a new job."""
    job = await make_print_job()

    assert job.status == JobStatus.CREATED
    assert job.print_count == 1
    assert job.template_version_id == OPENING_V1_ID
    assert job.template_name == "Branch opening"
    assert job.created_by == employee.id
    assert job.checklist_date == CHECKLIST_DATE
    assert len(job.history) == 1
    assert job.history[0].action == HistoryAction.CREATED
    assert job.history[0].actor_id == employee.id
    assert store.get_job(job.id) == job


@pytest.mark.asyncio
async def test_create_job_concurrently_never_collides(make_print_job):
    """Test that concurrent creations in one office get distinct short ids."""
    jobs = await asyncio.gather(*(make_print_job() for _ in range(10)))

    short_ids = sorted(job.short_id for job in jobs)
    assert short_ids == [f"CTR-{n:03d}" for n in range(1, 11)]


@pytest.mark.asyncio
async def test_create_job_unknown_template(store, employee):
    data = PrintJobCreate(template_id="nope", office_id=CTR_ID, checklist_date=CHECKLIST_DATE)
    with pytest.raises(NotFoundError):
        await service.create_job(store, employee, data)


@pytest.mark.asyncio
async def test_create_job_unknown_office(store, employee):
    data = PrintJobCreate(template_id=OPENING_ID, office_id="nope", checklist_date=CHECKLIST_DATE)
    with pytest.raises(NotFoundError):
        await service.create_job(store, employee, data)


@pytest.mark.asyncio
async def test_create_job_requires_actor(store):
    data = PrintJobCreate(template_id=OPENING_ID, office_id=CTR_ID, checklist_date=CHECKLIST_DATE)
    with pytest.raises(UnauthenticatedError):
        await service.create_job(store, None, data)
    assert store.jobs_snapshot() == []


@pytest.mark.asyncio
async def test_create_job_template_not_enabled(make_print_job):
    """Test that an office can only print templates enabled for it."""
    with pytest.raises(PreconditionError):
        await make_print_job(template_id=CLOSING_ID)


@pytest.mark.asyncio
async def test_create_job_template_without_version(make_print_job):
    with pytest.raises(PreconditionError):
        await make_print_job(template_id=DRAFT_ID)


@pytest.mark.asyncio
async def test_pinned_version_survives_template_revision(make_print_job, store, admin):
    """Test that revising a template leaves existing jobs on their version."""
    job = await make_print_job()

    new_version = await revise_template(store, admin, OPENING_ID, [
        ChecklistSectionIn(title="Lobby", items=[ChecklistItemIn(text="Lights on")]),
    ])
    later = await make_print_job()

    assert store.get_job(job.id).template_version_id == OPENING_V1_ID
    assert later.template_version_id == new_version.id
    assert [i.id for i in store.get_version(OPENING_V1_ID).iter_items()] == [
        "item-1", "item-2", "item-3",
    ]


@pytest.mark.asyncio
async def test_print_then_reprint(make_print_job, store, employee):
    """Test that the first print is logged as printed and later ones as reprints."""
    job = await make_print_job()

    job = await service.print_job(store, employee, job.id)
    assert job.print_count == 1
    assert job.history[-1].action == HistoryAction.PRINTED

    job = await service.print_job(store, employee, job.id)
    assert job.print_count == 2
    assert job.history[-1].action == HistoryAction.REPRINTED
    assert len(job.history) == 3


@pytest.mark.asyncio
async def test_print_rejected_after_scan(make_print_job, engine, store, employee, upload):
    job = await make_print_job()
    task = await engine.submit_scan(employee, job.id, upload)
    await task
    recognized = store.get_job(job.id)

    with pytest.raises(InvalidStateError):
        await service.print_job(store, employee, job.id)
    assert store.get_job(job.id) == recognized


@pytest.mark.asyncio
async def test_list_jobs_filters(make_print_job, store, manager):
    await make_print_job(checklist_date=date(2026, 10, 1))
    await make_print_job(checklist_date=date(2026, 10, 15))
    await make_print_job(office_id=NRT_ID, checklist_date=date(2026, 10, 15))
    await make_print_job(actor=manager, checklist_date=date(2026, 10, 20))

    by_office = service.list_jobs(store, service.JobFilter(office_id=NRT_ID))
    assert [job.short_id for job in by_office] == ["NRT-001"]

    by_creator = service.list_jobs(store, service.JobFilter(created_by=manager.id))
    assert [job.short_id for job in by_creator] == ["CTR-003"]

    by_date = service.list_jobs(store, service.JobFilter(
        date_from=date(2026, 10, 10),
        date_to=date(2026, 10, 16),
    ))
    assert len(by_date) == 2

    by_search = service.list_jobs(store, service.JobFilter(search="morgan"))
    assert [job.short_id for job in by_search] == ["CTR-003"]

    by_status = service.list_jobs(store, service.JobFilter(status=JobStatus.APPROVED))
    assert list(by_status) == []


@pytest.mark.asyncio
async def test_list_jobs_order_and_restart(make_print_job, store):
    """Test newest-first default ordering and that listings can be iterated twice."""
    for _ in range(3):
        await make_print_job()

    listing = service.list_jobs(store)
    first_pass = [job.short_id for job in listing]
    second_pass = [job.short_id for job in listing]

    assert first_pass == ["CTR-003", "CTR-002", "CTR-001"]
    assert second_pass == first_pass

    oldest_first = service.list_jobs(store, service.JobFilter(newest_first=False))
    assert [job.short_id for job in oldest_first] == ["CTR-001", "CTR-002", "CTR-003"]


@pytest.mark.asyncio
async def test_list_jobs_page(make_print_job, store):
    for _ in range(5):
        await make_print_job()

    listing = service.list_jobs(store, service.JobFilter(newest_first=False))
    assert [job.short_id for job in listing.page(2, 2)] == ["CTR-003", "CTR-004"]
    assert listing.page(4, 2) == []


def test_format_short_id():
    assert service.format_short_id("CTR", 7, padding=3) == "CTR-007"
    assert service.format_short_id("CTR", 1234, padding=3) == "CTR-1234"
