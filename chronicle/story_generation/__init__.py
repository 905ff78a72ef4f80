"""
Story generation utilities for the idea and narrative stages.
"""

from .idea_service import GenerationIdea, StoryIdeaGenerator, parse_generation_idea
from .languages import ENGLISH, LANGUAGES, VIETNAMESE, StoryLanguage, get_language
from .prompting import IDEA_PROMPT, IDEA_RESPONSE_SCHEMA, build_narrative_prompt
from .story_service import NarrativeGenerator

__all__ = [
    "ENGLISH",
    "GenerationIdea",
    "IDEA_PROMPT",
    "IDEA_RESPONSE_SCHEMA",
    "LANGUAGES",
    "NarrativeGenerator",
    "StoryIdeaGenerator",
    "StoryLanguage",
    "VIETNAMESE",
    "build_narrative_prompt",
    "get_language",
    "parse_generation_idea",
]
