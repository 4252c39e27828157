# (c) Copyright Datacraft, 2026
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from checkflow.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings | None = None) -> AsyncEngine:
	settings = settings or get_settings()
	if not settings.async_db_url:
		raise ValueError("db_url is not configured")
	return create_async_engine(settings.async_db_url, poolclass=NullPool)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker:
	return async_sessionmaker(engine, expire_on_commit=False)
