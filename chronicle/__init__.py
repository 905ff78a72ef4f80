"""
Entrepreneur Chronicle package exposing the story pipeline and its UI session.
"""

from .app import StorySession
from .common import load_settings
from .pipeline import StoryOrchestrator, StoryResult

__all__ = [
    "StoryOrchestrator",
    "StoryResult",
    "StorySession",
    "load_settings",
]
