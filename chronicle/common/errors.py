"""
Error types raised by the Entrepreneur Chronicle pipeline.
"""

from __future__ import annotations


class ChronicleError(Exception):
    """Base class for every error the pipeline raises on its own."""


class ConfigurationError(ChronicleError, ValueError):
    """A required credential or setting is missing or invalid."""


class MalformedResponse(ChronicleError, ValueError):
    """The idea stage returned structured output that could not be used."""


class EmptyNarrative(ChronicleError, RuntimeError):
    """The narrative stage returned no text."""


class ImageGenerationFailed(ChronicleError, RuntimeError):
    """The image stage returned no images, usually because of a safety refusal."""
