# (c) Copyright Datacraft, 2026
import logging
from contextlib import asynccontextmanager
from logging.config import dictConfig

import yaml
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from checkflow.core.config import Settings, get_settings
from checkflow.core.exceptions import (
	ChecklistError,
	InvalidStateError,
	NotFoundError,
	PreconditionError,
	UnauthenticatedError,
	UnauthorizedError,
)
from checkflow.core.features.print_jobs.router import router as print_jobs_router
from checkflow.core.features.recognition.base import Recognizer
from checkflow.core.features.recognition.service import build_recognition_engine
from checkflow.core.features.reports.router import router as reports_router
from checkflow.core.store import ChecklistStore, MemoryPersistence
from checkflow.core.version import __version__

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[ChecklistError], int] = {
	NotFoundError: status.HTTP_404_NOT_FOUND,
	UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
	UnauthorizedError: status.HTTP_403_FORBIDDEN,
	PreconditionError: status.HTTP_422_UNPROCESSABLE_CONTENT,
	InvalidStateError: status.HTTP_409_CONFLICT,
}


def error_status_code(exc: ChecklistError) -> int:
	# Most specific class wins: PreconditionError is an InvalidStateError
	for cls in type(exc).__mro__:
		if cls in ERROR_STATUS_CODES:
			return ERROR_STATUS_CODES[cls]
	return status.HTTP_400_BAD_REQUEST


async def checklist_error_handler(request: Request, exc: ChecklistError) -> JSONResponse:
	code = error_status_code(exc)
	if code >= 500:
		logger.error(f"{request.method} {request.url.path}: {exc}")
	return JSONResponse(
		status_code=code,
		content={"detail": str(exc), "error": type(exc).__name__},
	)


def configure_logging(settings: Settings) -> None:
	path = settings.log_config
	if path is None or not (path.exists() and path.is_file()):
		return
	with open(path, "r") as stream:
		config = yaml.safe_load(stream)
	dictConfig(config)


def build_store(settings: Settings) -> ChecklistStore:
	if not settings.async_db_url:
		return ChecklistStore(MemoryPersistence())

	from checkflow.core.db.engine import create_engine_from_settings
	from checkflow.core.db.persistence import SqlPersistence

	return ChecklistStore(SqlPersistence(create_engine_from_settings(settings)))


def create_app(
	settings: Settings | None = None,
	store: ChecklistStore | None = None,
	recognizer: Recognizer | None = None,
) -> FastAPI:
	settings = settings or get_settings()
	configure_logging(settings)
	store = store or build_store(settings)

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		"""Application lifespan handler for startup/shutdown events."""
		logger.info("Starting checkflow API server...")
		if not store.is_open:
			await store.open()
		app.state.store = store
		app.state.recognition = build_recognition_engine(store, settings, recognizer)

		yield

		logger.info("Shutting down checkflow API server...")
		await app.state.recognition.drain()
		await store.close()

	app = FastAPI(
		title="checkflow REST API",
		version=__version__,
		lifespan=lifespan,
	)
	app.state.settings = settings
	app.add_exception_handler(ChecklistError, checklist_error_handler)

	prefix = settings.api_prefix
	app.include_router(print_jobs_router, prefix=prefix)
	app.include_router(reports_router, prefix=prefix)
	return app
