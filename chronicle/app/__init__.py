"""
User-facing surfaces for chronicle. The Streamlit page lives in ``streamlit_app``.
"""

from .session import COPIED_FEEDBACK_SECONDS, StorySession

__all__ = ["COPIED_FEEDBACK_SECONDS", "StorySession"]
