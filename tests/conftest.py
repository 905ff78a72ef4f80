import asyncio
import io
import json

import pytest
from PIL import Image

from chronicle.ai_generation import GeneratedImage
from chronicle.common import ChatResult
from chronicle.pipeline import StoryOrchestrator
from chronicle.story_generation import ENGLISH, NarrativeGenerator, StoryIdeaGenerator

IDEA_PAYLOAD = {
    "name": "Marie Curie",
    "storyIdea": "Working late in her cluttered laboratory, discovering the glowing properties of radium.",
    "imagePromptDescription": "A scientist in a lab, looking with wonder at a glowing beaker",
}

NARRATIVE = " ".join(["Inspiration"] * 160)


def _tiny_jpeg() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (16, 9), color=(40, 60, 120)).save(buffer, format="JPEG")
    return buffer.getvalue()


JPEG_BYTES = _tiny_jpeg()


class FakeFileOutput:
    def __init__(self, data):
        self.data = data

    async def aread(self):
        return self.data


class LoopBoundReplicateClient:
    """
    Mimics replicate.Client's cached async transport: once used on one event
    loop, any call from another loop fails the way httpx does.
    """

    instances = []

    def __init__(self, api_token=None, output=None):
        self.api_token = api_token
        self.output = [FakeFileOutput(JPEG_BYTES)] if output is None else output
        self.calls = []
        self._loop = None
        LoopBoundReplicateClient.instances.append(self)

    async def async_run(self, model, input):
        loop = asyncio.get_running_loop()
        if self._loop is None:
            self._loop = loop
        elif self._loop is not loop:
            raise RuntimeError("Event loop is closed")
        self.calls.append((model, input))
        return self.output


class FakeCompletion:
    """Returns queued texts in order and records every call."""

    def __init__(self, *texts):
        self.texts = list(texts)
        self.calls = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return ChatResult(text=self.texts.pop(0), raw=None)


class FakeImageGenerator:
    def __init__(self, images=None):
        self.images = [GeneratedImage(data=JPEG_BYTES, mime_type="image/jpeg")] if images is None else images
        self.calls = []

    async def generate_images(self, prompt, **kwargs):
        self.calls.append({"prompt": prompt, **kwargs})
        return list(self.images)


def build_orchestrator(completion, image_generator, language=ENGLISH):
    return StoryOrchestrator(
        idea_generator=StoryIdeaGenerator(model="test-model", completion_fn=completion),
        narrative_generator=NarrativeGenerator(
            model="test-model",
            language=language,
            completion_fn=completion,
        ),
        image_generator=image_generator,
        language=language,
    )


@pytest.fixture
def idea_json():
    return json.dumps(IDEA_PAYLOAD)


@pytest.fixture
def completion(idea_json):
    return FakeCompletion(idea_json, f"  {NARRATIVE}\n")


@pytest.fixture
def image_generator():
    return FakeImageGenerator()


@pytest.fixture
def loop_bound_client_cls():
    LoopBoundReplicateClient.instances.clear()
    yield LoopBoundReplicateClient
    LoopBoundReplicateClient.instances.clear()
