from __future__ import annotations

import json
from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from magsday.constants import DEFAULT_APP_ID

BACKENDS = {"firebase", "memory"}


class Settings(BaseSettings):
    firebase_config_raw: str = Field("{}", alias="MAGSDAY_FIREBASE_CONFIG")
    app_id: str = Field(DEFAULT_APP_ID, alias="MAGSDAY_APP_ID")
    backend: str = Field("firebase", alias="MAGSDAY_BACKEND")

    gemini_api_key: str | None = Field(None, alias="MAGSDAY_GEMINI_API_KEY")
    gemini_model: str = Field("gemini-2.0-flash", alias="MAGSDAY_GEMINI_MODEL")

    log_level: str = Field("INFO", alias="MAGSDAY_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    @field_validator("backend")
    @classmethod
    def _known_backend(cls, value: str) -> str:
        clean = str(value or "").strip().lower()
        if clean not in BACKENDS:
            raise ValueError(f"Unknown backend {value!r}, expected one of {sorted(BACKENDS)}")
        return clean

    @field_validator("app_id")
    @classmethod
    def _clean_app_id(cls, value: str) -> str:
        clean = str(value or "").strip()
        if not clean or "/" in clean:
            raise ValueError("Application id must be a non-empty path segment")
        return clean

    @property
    def firebase_config(self) -> Dict[str, Any]:
        try:
            payload = json.loads(self.firebase_config_raw or "{}")
        except json.JSONDecodeError as exc:
            raise ValueError(f"MAGSDAY_FIREBASE_CONFIG is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError("MAGSDAY_FIREBASE_CONFIG must be a JSON object")
        return payload

    @property
    def assistant_enabled(self) -> bool:
        return bool(self.gemini_api_key)


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
