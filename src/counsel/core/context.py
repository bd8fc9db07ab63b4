"""Context block assembly.

Pure string building from a profile and a document list -- no I/O, so it
is unit-testable without any network fakes.
"""

import json
import math
from collections.abc import Iterable, Sequence
from typing import Any

from .models import Document, Profile
from .prompt import NOT_PROVIDED, SYSTEM_PROMPT_TEMPLATE

DEFAULT_EXCERPT_CHARS = 2000

_PROFILE_HEADER = "Student Profile:\n"
_DOCUMENTS_HEADER = "\n\nRelevant Documents:\n"


def _or_placeholder(value: str | None) -> str:
    return value or NOT_PROVIDED


def _joined(values: Iterable[str] | None) -> str:
    return ", ".join(values or ()) or NOT_PROVIDED


def _js_numbers(value: Any) -> Any:
    """Integral floats become ints and non-finite floats become ``None``.

    Matches how browsers serialise numbers (``3.0`` prints as ``3``).
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, dict):
        return {key: _js_numbers(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_js_numbers(item) for item in value]
    return value


def _profile_lines(profile: Profile | None) -> list[str]:
    if profile is None:
        profile = Profile()

    lines = [
        f"Name: {_or_placeholder(profile.full_name)}\n",
        f"Academic Level: {_or_placeholder(profile.academic_level)}\n",
        f"Interests: {_joined(profile.interests)}\n",
        f"Skills: {_joined(profile.skills)}\n",
    ]
    # An empty mapping still counts as present.
    if profile.academic_scores is not None:
        scores = json.dumps(
            _js_numbers(profile.academic_scores),
            separators=(",", ":"),
            ensure_ascii=False,
        )
        lines.append(f"Academic Scores: {scores}\n")
    return lines


def _document_blocks(documents: Sequence[Document], excerpt_chars: int) -> list[str]:
    blocks = []
    for position, doc in enumerate(documents, start=1):
        if not doc.extracted_text:
            continue
        excerpt = doc.extracted_text[:excerpt_chars]
        name = _or_placeholder(doc.file_name)
        blocks.append(f"\nDocument {position} ({name}):\n{excerpt}\n")
    return blocks


def build_context(
    profile: Profile | None,
    documents: Sequence[Document],
    excerpt_chars: int = DEFAULT_EXCERPT_CHARS,
) -> str:
    """Render the profile and documents as the context block.

    Missing profile fields (or a missing profile) render as
    ``Not provided``.  Documents keep their 1-based list position even
    when a preceding document has no extracted text.
    """
    parts = [_PROFILE_HEADER, *_profile_lines(profile)]
    if documents:
        parts.append(_DOCUMENTS_HEADER)
        parts.extend(_document_blocks(documents, excerpt_chars))
    return "".join(parts)


def build_system_prompt(context: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(context=context)


def build_messages(
    system_prompt: str, messages: Sequence[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Prepend the system message to the caller's messages."""
    return [{"role": "system", "content": system_prompt}, *messages]
