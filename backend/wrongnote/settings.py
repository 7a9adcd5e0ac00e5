from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator

DEFAULT_GEMINI_MODELS = "gemini-2.5-flash,gemini-2.0-flash,gemini-1.5-flash,gemini-1.5-flash-latest,gemini-1.5-pro"
STORE_BACKENDS = ("remote", "sql")

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	# Comma-separated candidate models, tried in order until one answers
	gemini_models: str = Field(default=DEFAULT_GEMINI_MODELS, validation_alias="GEMINI_MODELS")
	gemini_timeout: float = Field(default=30.0, validation_alias="GEMINI_TIMEOUT")
	# Vertex configuration
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")

	# Record store: "remote" (spreadsheet web app) or "sql" (SQLAlchemy database)
	store_backend: str = Field(default="remote", validation_alias="STORE_BACKEND")
	store_url: str | None = Field(default=None, validation_alias="STORE_URL")
	store_timeout: float = Field(default=30.0, validation_alias="STORE_TIMEOUT")

	# Database (sql backend only)
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
	upload_dir: str = Field(default="uploads", validation_alias="UPLOAD_DIR")

	log_level: str = Field(default="INFO", validation_alias="APP_LOG_LEVEL")
	log_format: str = Field(default="text", validation_alias="APP_LOG_FORMAT")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@field_validator("store_backend")
	@classmethod
	def _known_backend(cls, value: str) -> str:
		backend = value.strip().lower()
		if backend not in STORE_BACKENDS:
			raise ValueError(f"STORE_BACKEND must be one of {STORE_BACKENDS}, got {value!r}")
		return backend

	@property
	def gemini_model_candidates(self) -> List[str]:
		return [m.strip() for m in self.gemini_models.split(",") if m.strip()]

settings = Settings()
