"""
Prompt construction utilities for the idea and narrative stages.
"""

from __future__ import annotations

from typing import Any

from .languages import StoryLanguage

DEFAULT_LENGTH_GUIDANCE = "around 150-200 words"

IDEA_PROMPT = """Generate the name of a world-famous entrepreneur (e.g., Steve Jobs, Elon Musk, Oprah Winfrey), a brief, visually compelling anecdote about them, and a generic description for an image prompt. The image prompt description should capture the essence of the anecdote without using the entrepreneur's name. Focus on a specific moment of inspiration, challenge, or breakthrough.

Example Output:
{
  "name": "Marie Curie",
  "storyIdea": "Working late in her cluttered laboratory, discovering the glowing properties of radium.",
  "imagePromptDescription": "A pioneering female scientist in a dimly lit, turn-of-the-century laboratory, looking with wonder at a beaker containing a substance that is glowing with an ethereal blue light."
}"""

IDEA_FIELDS = ("name", "storyIdea", "imagePromptDescription")

IDEA_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {
            "type": "string",
            "description": "The full name of the entrepreneur.",
        },
        "storyIdea": {
            "type": "string",
            "description": (
                "A short, one-sentence description of a famous story or anecdote about them. "
                "This will be used to generate a full story."
            ),
        },
        "imagePromptDescription": {
            "type": "string",
            "description": (
                "A generic description of the scene for an image prompt that captures the essence "
                "of the story idea but avoids using the entrepreneur's specific name."
            ),
        },
    },
    "required": list(IDEA_FIELDS),
}


def idea_response_format() -> dict[str, Any]:
    """LiteLLM ``response_format`` payload requesting schema-constrained JSON."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "entrepreneur_idea",
            "schema": IDEA_RESPONSE_SCHEMA,
            "strict": True,
        },
    }


def build_narrative_prompt(
    name: str,
    story_idea: str,
    language: StoryLanguage,
    *,
    length_guidance: str = DEFAULT_LENGTH_GUIDANCE,
) -> str:
    """
    Build the user prompt that expands an anecdote into a short narrative.
    """
    if not name or not name.strip():
        raise ValueError("name must be a non-empty string.")

    if not story_idea or not story_idea.strip():
        raise ValueError("story_idea must be a non-empty string.")

    return (
        f"Write a short, inspiring story in {language.name} about {name.strip()}, "
        f'focusing on this specific moment: "{story_idea.strip()}". '
        f"Make it engaging and well written, {length_guidance} long. "
        "Do not use markdown formatting."
    )
