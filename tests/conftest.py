# (c) Copyright Datacraft, 2026
"""Shared fixtures: a seeded store, actors and a scripted recognizer."""
from datetime import date

import pytest

from checkflow.core.auth import Actor
from checkflow.core.features.offices.schema import Office
from checkflow.core.features.print_jobs.schema import PrintJobCreate
from checkflow.core.features.print_jobs.service import create_job
from checkflow.core.features.recognition.base import Recognizer
from checkflow.core.features.recognition.schema import (
    RecognitionResult,
    RecognizedItem,
    ScanUpload,
)
from checkflow.core.features.recognition.service import RecognitionEngine
from checkflow.core.features.templates.schema import (
    ChecklistItem,
    ChecklistSection,
    ChecklistTemplate,
    TemplateVersion,
)
from checkflow.core.store import ChecklistStore
from checkflow.core.types import ChecklistType, TemplateStatus, UserRole, Verdict

CTR_ID = "office-ctr"
NRT_ID = "office-nrt"
OPENING_ID = "tpl-opening"
OPENING_V1_ID = "ver-opening-1"
CLOSING_ID = "tpl-closing"
DRAFT_ID = "tpl-draft"
ITEM_IDS = ("item-1", "item-2", "item-3")
CHECKLIST_DATE = date(2026, 10, 18)


class ScriptedRecognizer(Recognizer):
    """Recognizer double with per-item confidences chosen by the test."""

    name = "scripted"

    def __init__(self, default_confidence=95, confidences=None, checked=True):
        self.default_confidence = default_confidence
        self.confidences = dict(confidences or {})
        self.checked = checked
        self.error_reason = None
        self.exception = None
        self.extra_items = ()
        self.calls = 0

    async def recognize(self, job, scan, version):
        self.calls += 1
        if self.exception is not None:
            raise self.exception
        if self.error_reason is not None:
            return RecognitionResult(
                scan_id=scan.id,
                print_job_id=job.id,
                status=Verdict.ERROR,
                error_reason=self.error_reason,
            )
        items = tuple(
            RecognizedItem(
                item_id=item.id,
                is_checked=self.checked,
                confidence=self.confidences.get(item.id, self.default_confidence),
            )
            for item in version.iter_items()
            if self.confidences.get(item.id, self.default_confidence) is not None
        )
        return RecognitionResult(
            scan_id=scan.id,
            print_job_id=job.id,
            items=items + tuple(self.extra_items),
            status=Verdict.AUTO_OK,
        )


def make_version(template_id, version_id, item_ids, version_number=1):
    return TemplateVersion(
        id=version_id,
        template_id=template_id,
        version_number=version_number,
        created_by="admin-1",
        status=TemplateStatus.PUBLISHED,
        sections=(
            ChecklistSection(
                id=f"{version_id}-section",
                title="Front desk",
                order=1,
                items=tuple(
                    ChecklistItem(id=item_id, text=f"Check {item_id}", order=idx)
                    for idx, item_id in enumerate(item_ids, start=1)
                ),
            ),
        ),
    )


@pytest.fixture
def store():
    store = ChecklistStore()
    opening_v1 = make_version(OPENING_ID, OPENING_V1_ID, ITEM_IDS)
    closing_v1 = make_version(CLOSING_ID, "ver-closing-1", ("close-1", "close-2"))
    store.put_template(ChecklistTemplate(
        id=OPENING_ID,
        name="Branch opening",
        type=ChecklistType.OPENING,
        status=TemplateStatus.PUBLISHED,
        versions=(opening_v1,),
        current_version_id=opening_v1.id,
    ))
    store.put_template(ChecklistTemplate(
        id=CLOSING_ID,
        name="Branch closing",
        type=ChecklistType.CLOSING,
        status=TemplateStatus.PUBLISHED,
        versions=(closing_v1,),
        current_version_id=closing_v1.id,
    ))
    store.put_template(ChecklistTemplate(
        id=DRAFT_ID,
        name="Weekly audit",
        type=ChecklistType.WEEKLY,
    ))
    store.put_office(Office(
        id=CTR_ID,
        name="Central",
        code="CTR",
        manager_ids=("mgr-1",),
        template_ids=(OPENING_ID, DRAFT_ID),
    ))
    store.put_office(Office(
        id=NRT_ID,
        name="North",
        code="NRT",
        manager_ids=("mgr-2",),
        template_ids=(OPENING_ID, CLOSING_ID),
    ))
    return store


@pytest.fixture
def employee():
    return Actor(id="emp-1", name="Erin Employee", role=UserRole.EMPLOYEE, office_ids=(CTR_ID,))


@pytest.fixture
def other_employee():
    return Actor(id="emp-2", name="Eli Employee", role=UserRole.EMPLOYEE, office_ids=(CTR_ID,))


@pytest.fixture
def manager():
    return Actor(id="mgr-1", name="Morgan Manager", role=UserRole.MANAGER, office_ids=(CTR_ID,))


@pytest.fixture
def north_manager():
    return Actor(id="mgr-2", name="Noa Manager", role=UserRole.MANAGER, office_ids=(NRT_ID,))


@pytest.fixture
def admin():
    return Actor(id="admin-1", name="Alex Admin", role=UserRole.ADMIN)


@pytest.fixture
def make_print_job(store, employee):
    async def _make(actor=None, office_id=CTR_ID, template_id=OPENING_ID, checklist_date=CHECKLIST_DATE):
        return await create_job(
            store,
            actor or employee,
            PrintJobCreate(
                template_id=template_id,
                office_id=office_id,
                checklist_date=checklist_date,
            ),
        )

    return _make


@pytest.fixture
def recognizer():
    return ScriptedRecognizer()


@pytest.fixture
def engine(store, recognizer):
    return RecognitionEngine(store, recognizer)


@pytest.fixture
def upload():
    return ScanUpload(file_name="scan.jpg", file_ref="scans/scan.jpg")


@pytest.fixture
def recognized_job(make_print_job, engine, employee, upload, store):
    """Create a job and run it through recognition."""

    async def _recognized(actor=None, **kwargs):
        job = await make_print_job(actor=actor, **kwargs)
        task = await engine.submit_scan(actor or employee, job.id, upload)
        await task
        return store.get_job(job.id)

    return _recognized

