"""
Orchestrates the three-stage chronicle pipeline from idea to narrative to illustration.
"""

from __future__ import annotations

import base64
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Mapping, Protocol, Sequence

import yaml

from chronicle.ai_generation import GeneratedImage, ReplicateImageGenerator, build_illustration_prompt
from chronicle.common import CompletionCallable, ImageGenerationFailed, Settings
from chronicle.story_generation import (
    VIETNAMESE,
    NarrativeGenerator,
    StoryIdeaGenerator,
    StoryLanguage,
    get_language,
)

ProgressCallback = Callable[[str], None]

IMAGE_OUTPUT_FORMAT = "jpg"
IMAGE_ASPECT_RATIO = "16:9"

_WHITESPACE_RUN = re.compile(r"\s+")

logger = logging.getLogger(__name__)


class ImageGenerator(Protocol):
    def generate_images(
        self,
        prompt: str,
        *,
        number_of_images: int = ...,
        output_format: str = ...,
        aspect_ratio: str = ...,
    ) -> Awaitable[Sequence[GeneratedImage]]:
        ...


@dataclass(frozen=True)
class StoryResult:
    """Aggregated output of one successful chronicle run."""

    subject_name: str
    narrative: str
    image_url: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "subjectName": self.subject_name,
            "narrative": self.narrative,
            "imageUrl": self.image_url,
        }

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "StoryResult":
        try:
            subject_name = str(payload["subjectName"]).strip()
            narrative = str(payload["narrative"]).strip()
            image_url = str(payload["imageUrl"]).strip()
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Invalid story result payload: {payload!r}") from exc

        if not subject_name or not narrative or not image_url:
            raise ValueError("Story result payload fields must be non-empty.")

        return cls(subject_name=subject_name, narrative=narrative, image_url=image_url)

    @classmethod
    def from_yaml(cls, source: str | Path) -> "StoryResult":
        path = Path(source)
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if not isinstance(data, Mapping):
            raise ValueError("Story result YAML must deserialize to a mapping.")
        return cls.from_dict(data)

    def image_bytes(self) -> bytes:
        """Decode the embedded data URI back to raw image bytes."""
        header, separator, encoded = self.image_url.partition(",")
        if not separator or not header.startswith("data:") or not header.endswith(";base64"):
            raise ValueError("Image URL is not a base64 data URI.")
        return base64.b64decode(encoded)

    def download_filename(self) -> str:
        stem = _WHITESPACE_RUN.sub("_", self.subject_name)
        return f"{stem}_inspiration.jpeg"


class StoryOrchestrator:
    """
    High-level coordinator that chains the idea, narrative, and image stages.
    """

    def __init__(
        self,
        *,
        idea_generator: StoryIdeaGenerator,
        narrative_generator: NarrativeGenerator,
        image_generator: ImageGenerator,
        language: StoryLanguage = VIETNAMESE,
    ) -> None:
        self._idea_generator = idea_generator
        self._narrative_generator = narrative_generator
        self._image_generator = image_generator
        self._language = language

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        completion_fn: CompletionCallable | None = None,
        image_generator: ImageGenerator | None = None,
    ) -> "StoryOrchestrator":
        language = get_language(settings.story_language)
        return cls(
            idea_generator=StoryIdeaGenerator(
                model=settings.text_model,
                api_key=settings.gemini_api_key,
                completion_fn=completion_fn,
            ),
            narrative_generator=NarrativeGenerator(
                model=settings.text_model,
                language=language,
                api_key=settings.gemini_api_key,
                temperature=settings.narrative_temperature,
                completion_fn=completion_fn,
            ),
            image_generator=image_generator
            or ReplicateImageGenerator(
                api_token=settings.replicate_api_token,
                model_identifier=settings.image_model,
            ),
            language=language,
        )

    @property
    def language(self) -> StoryLanguage:
        return self._language

    async def generate(self, on_progress: ProgressCallback) -> StoryResult:
        """
        Run idea, narrative, and image generation in order and assemble the result.

        ``on_progress`` receives one human-readable message before each stage. Any
        failure propagates unchanged and nothing from the run is kept.
        """
        on_progress(self._language.searching_message)
        logger.info("Generating story idea")
        idea = await self._idea_generator.generate_idea()

        on_progress(self._language.writing(idea.name))
        logger.info("Writing narrative about %s", idea.name)
        narrative = await self._narrative_generator.generate_narrative(idea)

        on_progress(self._language.illustrating(idea.name))
        logger.info("Illustrating story of %s", idea.name)
        prompt = build_illustration_prompt(idea.image_prompt_description, subject_name=idea.name)
        images = await self._image_generator.generate_images(
            prompt,
            number_of_images=1,
            output_format=IMAGE_OUTPUT_FORMAT,
            aspect_ratio=IMAGE_ASPECT_RATIO,
        )
        if not images:
            raise ImageGenerationFailed(
                "Image generation failed. The model may have refused to generate the image "
                "for safety reasons."
            )

        result = StoryResult(
            subject_name=idea.name,
            narrative=narrative,
            image_url=images[0].data_uri,
        )
        logger.info("Story about %s is ready", idea.name)
        return result
