"""
Environment-driven settings for the chronicle pipeline.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_TEXT_MODEL = "gemini/gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "google/imagen-4"
DEFAULT_STORY_LANGUAGE = "vi"
DEFAULT_NARRATIVE_TEMPERATURE = 0.8
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process."""

    gemini_api_key: str
    replicate_api_token: str
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    story_language: str = DEFAULT_STORY_LANGUAGE
    narrative_temperature: float = DEFAULT_NARRATIVE_TEMPERATURE
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    dotenv: bool = True,
) -> Settings:
    """
    Build :class:`Settings` from the process environment.

    Missing credentials raise :class:`ConfigurationError`; the caller is expected to
    treat that as a fatal startup failure.
    """
    if environ is None:
        if dotenv:
            load_dotenv()
        environ = os.environ

    gemini_api_key = (environ.get("GEMINI_API_KEY") or environ.get("API_KEY") or "").strip()
    replicate_api_token = (environ.get("REPLICATE_API_TOKEN") or "").strip()

    missing = []
    if not gemini_api_key:
        missing.append("GEMINI_API_KEY")
    if not replicate_api_token:
        missing.append("REPLICATE_API_TOKEN")
    if missing:
        raise ConfigurationError(
            f"Missing required environment variable(s): {', '.join(missing)}."
        )

    raw_temperature = environ.get("CHRONICLE_NARRATIVE_TEMPERATURE")
    if raw_temperature is None or raw_temperature.strip() == "":
        temperature = DEFAULT_NARRATIVE_TEMPERATURE
    else:
        try:
            temperature = float(raw_temperature)
        except ValueError as exc:
            raise ConfigurationError(
                f"CHRONICLE_NARRATIVE_TEMPERATURE must be a number, got {raw_temperature!r}."
            ) from exc

    return Settings(
        gemini_api_key=gemini_api_key,
        replicate_api_token=replicate_api_token,
        text_model=environ.get("CHRONICLE_TEXT_MODEL") or DEFAULT_TEXT_MODEL,
        image_model=environ.get("CHRONICLE_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
        story_language=(environ.get("CHRONICLE_STORY_LANGUAGE") or DEFAULT_STORY_LANGUAGE).strip().lower(),
        narrative_temperature=temperature,
        log_level=environ.get("CHRONICLE_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
    )
