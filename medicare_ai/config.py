"""
MediCare+ AI — Configuration

Two layers:
- ``Settings``: process configuration read from the environment / ``.env``
  (prefix ``MEDICARE_AI_``), e.g. ``MEDICARE_AI_LOG_LEVEL=DEBUG``.
- ``AISettings``: the admin-editable AI settings record (enable switch,
  confidence threshold, auto-triage), persisted as JSON and read once by
  the caller before invoking the engine.
"""
from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from medicare_ai.utils import SettingsError, get_logger

logger = get_logger(__name__)

load_dotenv()


class Settings(BaseSettings):
    """Runtime settings for the MediCare+ AI service."""

    model_config = SettingsConfigDict(env_prefix="MEDICARE_AI_", extra="ignore")

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_color: bool = True

    # Seed for the engine's random source; unset = non-reproducible output
    random_seed: Optional[int] = None

    # Simulated processing latency, seconds (cosmetic, UI only)
    simulate_latency: bool = True
    symptom_latency_min: float = Field(2.0, ge=0)
    symptom_latency_max: float = Field(3.0, ge=0)
    image_latency_min: float = Field(3.0, ge=0)
    image_latency_max: float = Field(5.0, ge=0)
    prescription_latency_min: float = Field(1.5, ge=0)
    prescription_latency_max: float = Field(1.5, ge=0)

    # History
    history_max_records: Optional[int] = Field(None, gt=0)

    # Where the admin dashboard stores AI settings
    ai_settings_file: Optional[str] = None


DEFAULT_CONFIDENCE_THRESHOLD = 80


class AIModel(str, Enum):
    """Analysis models the admin can switch on or off."""
    SYMPTOM_ANALYZER       = "symptom_analyzer"
    IMAGE_ANALYZER         = "image_analyzer"
    TRIAGE_SYSTEM          = "triage_system"
    PRESCRIPTION_SUGGESTER = "prescription_suggester"


class AISettings(BaseModel):
    """
    Admin AI settings.

    Accepts the dashboard's camelCase keys (``confidenceThreshold``,
    ``autoTriage``, ``enableAI``) as well as snake_case.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    enable_ai: bool = Field(True, alias="enableAI")
    confidence_threshold: int = Field(DEFAULT_CONFIDENCE_THRESHOLD, ge=0, le=100)
    auto_triage: bool = True

    @field_validator("confidence_threshold", mode="before")
    @classmethod
    def _zero_threshold_means_default(cls, value):
        # An unset (zero or empty) threshold falls back to the default
        if value is None or value == "" or value == 0 or value == "0":
            return DEFAULT_CONFIDENCE_THRESHOLD
        return value

    def is_enabled(self, model: AIModel) -> bool:
        if not self.enable_ai:
            return False
        if model is AIModel.TRIAGE_SYSTEM:
            return self.auto_triage
        return True


def load_ai_settings(path: Optional[Union[str, Path]]) -> AISettings:
    """
    Read AI settings from a JSON file.

    A missing path or file yields the defaults. Unreadable, malformed or
    out-of-range content raises SettingsError.
    """
    if path is None:
        return AISettings()

    path = Path(path)
    if not path.exists():
        logger.info(f"AI settings file {path} not found, using defaults")
        return AISettings()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        settings = AISettings.model_validate(raw)
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Could not read AI settings: {e}", path=str(path)) from e
    except ValidationError as e:
        raise SettingsError(
            "Invalid AI settings",
            path=str(path),
            details={"errors": e.errors(include_url=False)},
        ) from e

    logger.debug(f"Loaded AI settings from {path}: {settings.model_dump()}")
    return settings


def save_ai_settings(settings: AISettings, path: Union[str, Path]) -> None:
    """Write AI settings as camelCase JSON, creating parent directories."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(settings.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    except OSError as e:
        raise SettingsError(f"Could not write AI settings: {e}", path=str(path)) from e
    logger.info(f"AI settings saved to {path}")


settings = Settings()
