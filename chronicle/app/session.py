"""
Page state for one user: loading flag, progress text, result, error, and copy feedback.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from chronicle.pipeline import StoryOrchestrator, StoryResult

COPIED_FEEDBACK_SECONDS = 2.0

logger = logging.getLogger(__name__)


class StorySession:
    """
    Drives a :class:`StoryOrchestrator` on behalf of the UI and owns what it displays.
    """

    def __init__(
        self,
        orchestrator: StoryOrchestrator,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._orchestrator = orchestrator
        self._clock = clock
        self._copied_until: float | None = None

        self.result: StoryResult | None = None
        self.is_loading = False
        self.progress_message = ""
        self.error: str | None = None

    @property
    def language(self):
        return self._orchestrator.language

    async def generate(
        self,
        on_progress: Callable[[str], None] | None = None,
    ) -> StoryResult | None:
        """
        Run one generation and update the page state.

        ``on_progress`` is notified after each progress update so a UI can redraw.
        Returns the new result, or ``None`` when the run failed or another run was
        already in flight.
        """
        if self.is_loading:
            logger.warning("Ignoring generate request while a run is in flight")
            return None

        self.is_loading = True
        self.error = None
        self.result = None
        self._copied_until = None

        def set_progress(message: str) -> None:
            self.progress_message = message
            if on_progress is not None:
                on_progress(message)

        try:
            self.result = await self._orchestrator.generate(set_progress)
        except Exception:
            logger.exception("Story generation failed")
            self.error = self.language.failure_message
        finally:
            self.is_loading = False
            self.progress_message = ""

        return self.result

    def copy_narrative(self, clipboard: Callable[[str], None]) -> bool:
        if self.result is None:
            return False

        clipboard(self.result.narrative)
        self._copied_until = self._clock() + COPIED_FEEDBACK_SECONDS
        return True

    @property
    def is_copied(self) -> bool:
        return self._copied_until is not None and self._clock() < self._copied_until

    @property
    def download_filename(self) -> str | None:
        if self.result is None:
            return None
        return self.result.download_filename()

    def image_bytes(self) -> bytes | None:
        if self.result is None:
            return None
        return self.result.image_bytes()
