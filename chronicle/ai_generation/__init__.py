"""
AI image generation package for chronicle illustrations.
"""

from .prompting import ILLUSTRATION_STYLE_SUFFIX, build_illustration_prompt, redact_subject_name
from .replicate_service import GeneratedImage, ReplicateImageGenerator

__all__ = [
    "GeneratedImage",
    "ILLUSTRATION_STYLE_SUFFIX",
    "ReplicateImageGenerator",
    "build_illustration_prompt",
    "redact_subject_name",
]
