"""
Prompt construction utilities for the illustration stage.
"""

from __future__ import annotations

import re

ILLUSTRATION_STYLE_SUFFIX = (
    "Style: cinematic, high-quality digital art, detailed, slightly stylized, "
    "dramatic lighting, epic."
)

NAME_PLACEHOLDER = "the visionary"

_MIN_NAME_TOKEN_LENGTH = 3


def redact_subject_name(text: str, subject_name: str) -> str:
    """
    Replace every mention of ``subject_name`` in ``text`` with a neutral phrase.

    The full name is matched case-insensitively. Individual name parts (e.g. a
    surname on its own) are matched on word boundaries and replaced only where the
    description capitalizes them, so ordinary lowercase words such as "jobs"
    survive however the model cased the returned name.
    """
    name = " ".join(subject_name.split())
    if not name:
        return text

    full_name_pattern = r"\s+".join(re.escape(part) for part in name.split(" "))
    redacted = re.sub(full_name_pattern, NAME_PLACEHOLDER, text, flags=re.IGNORECASE)

    for token in name.split(" "):
        token = token.strip(".,'\"")
        if len(token) < _MIN_NAME_TOKEN_LENGTH:
            continue
        redacted = re.sub(
            rf"\b{re.escape(token)}\b",
            _replace_capitalized,
            redacted,
            flags=re.IGNORECASE,
        )

    return redacted


def _replace_capitalized(match: re.Match[str]) -> str:
    word = match.group(0)
    return NAME_PLACEHOLDER if word[0].isupper() else word


def build_illustration_prompt(description: str, *, subject_name: str) -> str:
    """
    Build the image prompt from the generic scene description and the fixed style.
    """
    if not description or not description.strip():
        raise ValueError("description must be a non-empty string.")

    scene = redact_subject_name(description.strip(), subject_name).rstrip(".")
    return f"{scene}. {ILLUSTRATION_STYLE_SUFFIX}"
