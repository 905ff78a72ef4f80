"""
End-to-end orchestration for chronicle story and image generation.
"""

from .pipeline import ImageGenerator, ProgressCallback, StoryOrchestrator, StoryResult

__all__ = [
    "ImageGenerator",
    "ProgressCallback",
    "StoryOrchestrator",
    "StoryResult",
]
