# (c) Copyright Datacraft, 2026
"""Tests for application wiring."""
import importlib
import logging
import warnings

import pytest

from checkflow.app import build_store, configure_logging, error_status_code
from checkflow.core.config import Settings
from checkflow.core.db.persistence import SqlPersistence
from checkflow.core.exceptions import (
    InvalidStateError,
    NotFoundError,
    PreconditionError,
    UnauthenticatedError,
    UnauthorizedError,
)
from checkflow.core.store import MemoryPersistence


@pytest.mark.parametrize("exc,code", [
    (NotFoundError("Print job", "x"), 404),
    (UnauthenticatedError("no actor"), 401),
    (UnauthorizedError("employee"), 403),
    (InvalidStateError("terminal"), 409),
    (PreconditionError("no result"), 422),
])
def test_error_status_codes(exc, code):
    assert error_status_code(exc) == code


def test_configure_logging_from_yaml(tmp_path):
    path = tmp_path / "logging.yaml"
    path.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "loggers:\n"
        "  checkflow.test_logging:\n"
        "    level: WARNING\n"
    )

    configure_logging(Settings(log_config=path))

    assert logging.getLogger("checkflow.test_logging").level == logging.WARNING


def test_configure_logging_missing_file(tmp_path):
    configure_logging(Settings(log_config=tmp_path / "absent.yaml"))


def test_build_store_backend(tmp_path):
    assert isinstance(build_store(Settings(db_url=None)).persistence, MemoryPersistence)

    store = build_store(Settings(db_url=f"sqlite:///{tmp_path / 'cf.db'}"))
    assert isinstance(store.persistence, SqlPersistence)


def test_app_module_uses_current_status_names():
    """Test that importing the app raises no deprecation warnings for status codes."""
    import checkflow.app

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        importlib.reload(checkflow.app)

    assert not [w for w in caught if "HTTP_422" in str(w.message)]
    assert checkflow.app.ERROR_STATUS_CODES[PreconditionError] == 422
