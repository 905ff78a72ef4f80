"""
Streamlit page for Entrepreneur Chronicle.

Run with:
    streamlit run chronicle/app/streamlit_app.py
"""

from __future__ import annotations

import asyncio
import json

import streamlit as st
import streamlit.components.v1 as components

from chronicle.app.session import StorySession
from chronicle.common import ConfigurationError, configure_logging, load_settings
from chronicle.pipeline import StoryOrchestrator


@st.cache_resource
def _build_orchestrator() -> StoryOrchestrator:
    settings = load_settings()
    configure_logging(settings.log_level)
    return StoryOrchestrator.from_settings(settings)


def _browser_clipboard(text: str) -> None:
    components.html(
        "<script>"
        f"parent.navigator.clipboard.writeText({json.dumps(text)})"
        ".catch((err) => console.warn('Clipboard write rejected:', err));"
        "</script>",
        height=0,
    )


st.set_page_config(page_title="Entrepreneur Chronicle", page_icon="📜", layout="wide")

try:
    orchestrator = _build_orchestrator()
except ConfigurationError as exc:
    st.error(str(exc))
    st.stop()

# ==========================
# State
# ==========================
if "session" not in st.session_state:
    st.session_state["session"] = StorySession(orchestrator)
st.session_state.setdefault("pending", False)

session: StorySession = st.session_state["session"]
language = session.language
pending = st.session_state["pending"]

content = st.container()

# ==========================
# Trigger
# ==========================
busy = pending or session.is_loading
if st.button(
    language.generating_label if busy else language.generate_label,
    key="generate",
    type="primary",
    disabled=busy,
):
    st.session_state["pending"] = True
    st.rerun()

# ==========================
# Content
# ==========================
with content:
    if pending:
        progress = st.empty()
        with st.spinner(language.generating_label):
            asyncio.run(session.generate(on_progress=progress.info))
        progress.empty()
        st.session_state["pending"] = False
        st.rerun()

    if session.result is None:
        st.title(language.title)
        st.write(language.intro)
    else:
        result = session.result
        st.image(result.image_bytes(), caption=result.subject_name, width="stretch")
        st.header(result.subject_name)
        st.write(result.narrative)

        copy_col, download_col = st.columns(2)
        with copy_col:
            copy_label = language.copied_label if session.is_copied else language.copy_label
            if st.button(copy_label, key="copy", width="stretch"):
                session.copy_narrative(_browser_clipboard)
                st.toast(language.copied_label)
        with download_col:
            st.download_button(
                language.download_label,
                data=session.image_bytes(),
                file_name=session.download_filename,
                mime="image/jpeg",
                key="download",
                width="stretch",
            )

    if session.error:
        st.error(session.error)
