"""Defensive text extraction for Gemini generate_content responses.

The SDK response shape has drifted between releases and wrappers, so the
reply text is looked up along several known paths, first hit wins. When none
of them match, the whole response is serialized so callers still get
something they can diagnose.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Tuple, Union


logger = logging.getLogger("gemini-relay.parser")

PathStep = Union[str, int]

TEXT_PATHS: Tuple[Tuple[PathStep, ...], ...] = (
    ("response", "candidate", 0, "content", "part", 0, "text"),
    ("candidate", 0, "content", "parts", 0, "text"),
    ("response", "candidates", 0, "content", "text"),
)

_MISSING = object()


def extract_text(response: Any) -> str:
    """Return the reply text of ``response``; never raises."""
    try:
        for path in TEXT_PATHS:
            text = lookup_path(response, path)
            if text is not None:
                return text if isinstance(text, str) else str(text)
        return dump_response(response)
    except Exception:  # pylint: disable=broad-except
        logger.exception("Error extracting text from model response")
        return dump_response(response)


def lookup_path(value: Any, path: Sequence[PathStep]) -> Optional[Any]:
    """Walk ``path`` through mappings, sequences and attributes.

    Returns ``None`` as soon as a step is missing.
    """
    current = value
    for step in path:
        if current is None:
            return None
        current = _step(current, step)
        if current is _MISSING:
            return None
    return current


def _step(current: Any, step: PathStep) -> Any:
    if isinstance(step, int):
        if isinstance(current, (str, bytes)) or not isinstance(current, Sequence):
            return _MISSING
        if -len(current) <= step < len(current):
            return current[step]
        return _MISSING

    if isinstance(current, Mapping):
        return current.get(step, _MISSING)
    return getattr(current, step, _MISSING)


def dump_response(response: Any) -> str:
    """Serialize the raw response as indented JSON."""
    try:
        return json.dumps(_to_plain(response), indent=2, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        logger.exception("Model response is not JSON serializable; using repr")
        return repr(response)


def _to_plain(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict) and not isinstance(value, Mapping):
        return to_dict()
    return value
