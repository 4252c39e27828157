# (c) Copyright Datacraft, 2026
"""Application settings configuration."""
from pathlib import Path

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Empty means the store keeps everything in memory
	db_url: str | None = None
	log_config: Path | None = Path("/etc/checkflow/logging.yaml")
	api_prefix: str = ''

	# Recognition
	recognition_review_threshold: int = Field(default=70, ge=0, le=100)
	recognition_delay_seconds: float = Field(default=0.0, ge=0)
	recognition_seed: int | None = None
	recognition_error_rate: float = Field(default=0.2, ge=0, le=1)
	recognition_review_rate: float = Field(default=0.3, ge=0, le=1)

	# Print jobs
	short_id_padding: int = Field(default=3, gt=0)

	# Remote user config
	remote_user_header: str = "X-Forwarded-User"
	remote_name_header: str = "X-Forwarded-Name"
	remote_roles_header: str = "X-Forwarded-Roles"
	remote_offices_header: str = "X-Forwarded-Offices"

	@computed_field
	@property
	def async_db_url(self) -> str | None:
		if not self.db_url:
			return None
		url = self.db_url
		if url.startswith("postgresql://"):
			return url.replace("postgresql://", "postgresql+asyncpg://", 1)
		if url.startswith("sqlite:///"):
			return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
		return url

	model_config = SettingsConfigDict(
		env_prefix='cf_',
		env_file='.env',
		env_file_encoding='utf-8',
		extra='ignore',
	)


_settings: Settings | None = None


def get_settings() -> Settings:
	global _settings
	if _settings is None:
		_settings = Settings()
	return _settings
