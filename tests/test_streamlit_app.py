"""
Streamlit page tests driven through streamlit's AppTest harness.

The page's real wiring runs (cached orchestrator, session state, asyncio.run per
click); only the LiteLLM call and the Replicate client are replaced.
"""
import json
from pathlib import Path

import pytest
import streamlit as st
import streamlit.components.v1 as components
from streamlit.testing.v1 import AppTest

import chronicle.common
from chronicle.ai_generation import replicate_service
from chronicle.app import StorySession
from chronicle.common import ConfigurationError, llm, load_settings
from chronicle.story_generation import ENGLISH

from conftest import IDEA_PAYLOAD, NARRATIVE, FakeCompletion, FakeImageGenerator, build_orchestrator

APP_PATH = Path(__file__).resolve().parents[1] / "chronicle" / "app" / "streamlit_app.py"

SECOND_IDEA = {
    "name": "Sara Blakely",
    "storyIdea": "Cutting the feet off her pantyhose before a party and seeing a business in it.",
    "imagePromptDescription": "A young woman in a small apartment holding scissors and fabric",
}

SETTINGS = load_settings(
    {
        "GEMINI_API_KEY": "gemini-key",
        "REPLICATE_API_TOKEN": "r8-token",
        "CHRONICLE_STORY_LANGUAGE": "en",
        "CHRONICLE_LOG_LEVEL": "WARNING",
    },
    dotenv=False,
)


class QueuedAcompletion:
    """Stands in for litellm.acompletion, answering with queued message texts."""

    def __init__(self, *texts):
        self.texts = list(texts)
        self.calls = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return {"choices": [{"message": {"content": self.texts.pop(0)}}]}


def _new_app():
    return AppTest.from_file(str(APP_PATH), default_timeout=10)


@pytest.fixture(autouse=True)
def fresh_resource_cache():
    st.cache_resource.clear()
    yield
    st.cache_resource.clear()


@pytest.fixture
def page_backends(monkeypatch, loop_bound_client_cls):
    monkeypatch.setattr(chronicle.common, "load_settings", lambda: SETTINGS)
    monkeypatch.setattr(replicate_service.replicate, "Client", loop_bound_client_cls)
    acompletion = QueuedAcompletion(
        json.dumps(IDEA_PAYLOAD),
        NARRATIVE,
        json.dumps(SECOND_IDEA),
        NARRATIVE,
    )
    monkeypatch.setattr(llm, "acompletion", acompletion)
    return acompletion


class TestGenerateFlow:
    def test_first_load_shows_intro_and_enabled_trigger(self, page_backends):
        at = _new_app().run()

        assert not at.exception
        assert at.title[0].value == ENGLISH.title
        trigger = at.button(key="generate")
        assert trigger.label == ENGLISH.generate_label
        assert not trigger.disabled

    def test_two_clicks_render_two_stories(self, page_backends, loop_bound_client_cls):
        at = _new_app().run()

        at.button(key="generate").click().run()
        assert not at.exception
        assert len(at.error) == 0
        assert at.header[0].value == "Marie Curie"

        at.button(key="generate").click().run()
        assert not at.exception
        assert len(at.error) == 0
        assert at.header[0].value == "Sara Blakely"

        assert len(page_backends.calls) == 4
        assert [len(client.calls) for client in loop_bound_client_cls.instances] == [1, 1]
        assert at.session_state["pending"] is False

    def test_download_button_gets_sanitized_filename(self, page_backends, monkeypatch):
        file_names = []
        original = st.download_button

        def recording_download_button(*args, **kwargs):
            file_names.append(kwargs.get("file_name"))
            return original(*args, **kwargs)

        monkeypatch.setattr(st, "download_button", recording_download_button)

        at = _new_app().run()
        at.button(key="generate").click().run()

        assert file_names[-1] == "Marie_Curie_inspiration.jpeg"
        assert at.session_state["session"].download_filename == "Marie_Curie_inspiration.jpeg"

    def test_copy_writes_narrative_and_tolerates_clipboard_rejection(self, page_backends, monkeypatch):
        snippets = []
        monkeypatch.setattr(components, "html", lambda body, **kwargs: snippets.append(body))

        at = _new_app().run()
        at.button(key="generate").click().run()
        at.button(key="copy").click().run()

        assert not at.exception
        assert len(snippets) == 1
        assert "writeText(" in snippets[0]
        assert ".catch(" in snippets[0]
        assert at.toast[0].value == ENGLISH.copied_label


class TestFailures:
    def test_refused_image_shows_failure_message(self, page_backends, monkeypatch, loop_bound_client_cls):
        monkeypatch.setattr(
            replicate_service.replicate,
            "Client",
            lambda api_token=None: loop_bound_client_cls(api_token, output=[]),
        )

        at = _new_app().run()
        at.button(key="generate").click().run()

        assert not at.exception
        assert at.error[0].value == ENGLISH.failure_message
        assert at.session_state["session"].result is None
        assert at.title[0].value == ENGLISH.title
        assert not at.button(key="generate").disabled

    def test_missing_configuration_is_reported(self, monkeypatch):
        def missing_settings():
            raise ConfigurationError("Missing required environment variables: GEMINI_API_KEY")

        monkeypatch.setattr(chronicle.common, "load_settings", missing_settings)

        at = _new_app().run()

        assert "GEMINI_API_KEY" in at.error[0].value
        assert len(at.button) == 0


class TestBusyTrigger:
    def test_trigger_is_disabled_while_a_run_is_in_flight(self, monkeypatch):
        monkeypatch.setattr(chronicle.common, "load_settings", lambda: SETTINGS)
        session = StorySession(build_orchestrator(FakeCompletion(), FakeImageGenerator()))
        session.is_loading = True

        at = _new_app()
        at.session_state["session"] = session
        at.run()

        trigger = at.button(key="generate")
        assert trigger.disabled
        assert trigger.label == ENGLISH.generating_label
