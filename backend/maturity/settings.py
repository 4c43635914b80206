from __future__ import annotations
from dataclasses import dataclass
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

DEFAULT_DATABASE_URL = "sqlite:///./assessments.db"


class Settings(BaseSettings):
	openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
	# Any OpenAI-compatible chat completions endpoint works
	openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")
	openai_base_url: str = Field(default="https://api.openai.com/v1/chat/completions", validation_alias="OPENAI_BASE_URL")
	openai_timeout_seconds: float = Field(default=30.0, validation_alias="OPENAI_TIMEOUT_SECONDS")

	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

	# Comma separated list, "*" allows every origin
	cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	service_name: str = Field(default="InnooRyze MMA Backend", validation_alias="SERVICE_NAME")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@property
	def cors_origin_list(self) -> List[str]:
		return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]


@dataclass(frozen=True)
class ConfigDiagnostic:
	setting: str
	severity: str  # "warning" | "info"
	message: str


def validate_configuration(cfg: Settings) -> List[ConfigDiagnostic]:
	"""Report missing or defaulted configuration without failing startup."""
	diagnostics: List[ConfigDiagnostic] = []
	if not cfg.openai_api_key:
		diagnostics.append(ConfigDiagnostic(
			setting="OPENAI_API_KEY",
			severity="warning",
			message="OPENAI_API_KEY is not set; assessment scoring will fail",
		))
	if not cfg.database_url:
		diagnostics.append(ConfigDiagnostic(
			setting="DATABASE_URL",
			severity="info",
			message=f"DATABASE_URL is not set; using {DEFAULT_DATABASE_URL}",
		))
	return diagnostics


settings = Settings()
