"""
Stage one: ask the text model for an entrepreneur, an anecdote, and a name-free scene.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from chronicle.common import ChatResult, CompletionCallable, MalformedResponse, call_chat_completion

from .prompting import IDEA_FIELDS, IDEA_PROMPT, idea_response_format

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationIdea:
    """
    Structured output of the idea stage. Lives only for the duration of one run.
    """

    name: str
    story_idea: str
    image_prompt_description: str


class StoryIdeaGenerator:
    """
    Requests a schema-constrained idea from a LiteLLM-compatible model.
    """

    def __init__(
        self,
        *,
        model: str,
        api_key: str | None = None,
        completion_fn: CompletionCallable | None = None,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._completion_fn: CompletionCallable = completion_fn or call_chat_completion

    @property
    def model(self) -> str:
        """Return the model identifier in use."""
        return self._model

    async def generate_idea(self, **response_kwargs: Any) -> GenerationIdea:
        result: ChatResult = await self._completion_fn(
            model=self._model,
            messages=[{"role": "user", "content": IDEA_PROMPT}],
            api_key=self._api_key,
            response_format=idea_response_format(),
            **response_kwargs,
        )
        idea = parse_generation_idea(result.text)
        logger.debug("Idea stage picked %s", idea.name)
        return idea


def parse_generation_idea(raw_text: str) -> GenerationIdea:
    """
    Parse the idea JSON, requiring every field to be a non-blank string.
    """
    try:
        parsed = json.loads(raw_text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedResponse("Failed to parse idea response as JSON.") from exc

    if not isinstance(parsed, dict):
        raise MalformedResponse("Idea response JSON must be an object.")

    missing = [field for field in IDEA_FIELDS if field not in parsed]
    if missing:
        raise MalformedResponse(
            f"Idea response is missing required field(s): {', '.join(missing)}."
        )

    values: dict[str, str] = {}
    for field in IDEA_FIELDS:
        value = parsed[field]
        if not isinstance(value, str) or not value.strip():
            raise MalformedResponse(f"Idea field '{field}' must be a non-empty string.")
        values[field] = value.strip()

    return GenerationIdea(
        name=values["name"],
        story_idea=values["storyIdea"],
        image_prompt_description=values["imagePromptDescription"],
    )
