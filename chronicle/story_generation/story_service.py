"""
Stage two: expand the anecdote into a short narrative via LiteLLM-compatible models.
"""

from __future__ import annotations

from typing import Any

from chronicle.common import ChatResult, CompletionCallable, EmptyNarrative, call_chat_completion

from .idea_service import GenerationIdea
from .languages import StoryLanguage
from .prompting import build_narrative_prompt

DEFAULT_NARRATIVE_TEMPERATURE = 0.8


class NarrativeGenerator:
    """
    High-level helper that turns a generated idea into finished prose.
    """

    def __init__(
        self,
        *,
        model: str,
        language: StoryLanguage,
        api_key: str | None = None,
        temperature: float = DEFAULT_NARRATIVE_TEMPERATURE,
        completion_fn: CompletionCallable | None = None,
    ) -> None:
        self._model = model
        self._language = language
        self._api_key = api_key
        self._temperature = temperature
        self._completion_fn: CompletionCallable = completion_fn or call_chat_completion

    @property
    def model(self) -> str:
        """Return the model identifier in use."""
        return self._model

    @property
    def language(self) -> StoryLanguage:
        return self._language

    async def generate_narrative(self, idea: GenerationIdea, **response_kwargs: Any) -> str:
        """
        Invoke the configured LLM to produce the narrative text.
        """
        prompt = build_narrative_prompt(idea.name, idea.story_idea, self._language)

        result: ChatResult = await self._completion_fn(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
            api_key=self._api_key,
            **response_kwargs,
        )

        narrative = (result.text or "").strip()
        if not narrative:
            raise EmptyNarrative("LLM response did not contain any narrative text.")

        return narrative
