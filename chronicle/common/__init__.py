"""
Common utilities shared across chronicle modules.
"""

from .config import Settings, load_settings
from .errors import (
    ChronicleError,
    ConfigurationError,
    EmptyNarrative,
    ImageGenerationFailed,
    MalformedResponse,
)
from .llm import ChatResult, CompletionCallable, call_chat_completion
from .logging_setup import configure_logging

__all__ = [
    "ChatResult",
    "ChronicleError",
    "CompletionCallable",
    "ConfigurationError",
    "EmptyNarrative",
    "ImageGenerationFailed",
    "MalformedResponse",
    "Settings",
    "call_chat_completion",
    "configure_logging",
    "load_settings",
]
