"""
Best-effort JSON object extraction from free-form model text.

Models asked for JSON sometimes wrap it in prose or markdown fences. This
module scans the outermost balanced ``{...}`` spans for the first one that
parses as a JSON object. Failure mode: ``None``, never an exception.
"""

import json
import logging
from typing import Optional, Dict, Any, Iterator, Tuple


logger = logging.getLogger(__name__)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if present."""
    stripped = text.strip()
    if not stripped.startswith('```'):
        return stripped

    lines = stripped.split('\n')
    lines = lines[1:]
    if lines and lines[-1].strip().startswith('```'):
        lines = lines[:-1]
    return '\n'.join(lines).strip()


def _balanced_spans(text: str) -> Iterator[Tuple[int, int]]:
    """
    Yield (start, end) of every outermost balanced brace span, in order.

    A single pass with a stack of open positions. Quotes are only tracked
    inside braces, so braces within string values do not count. An opener
    that never closes does not hide complete objects that follow it, and
    a stray ``}`` with nothing open is ignored.
    """
    pairs = []
    stack = []
    in_string = False
    escaped = False

    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == '\\':
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '{':
            stack.append(i)
        elif ch == '}' and stack:
            pairs.append((stack.pop(), i + 1))
        elif ch == '"' and stack:
            in_string = True

    last_end = 0
    for start, end in sorted(pairs):
        if start >= last_end:
            yield start, end
            last_end = end


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Return the first well-formed JSON object found in ``text``.

    Args:
        text: Raw provider output

    Returns:
        Parsed dict, or None if no candidate parses as an object
    """
    if not text or not text.strip():
        return None

    cleaned = strip_code_fences(text)

    try:
        parsed = json.loads(cleaned)
        if isinstance(parsed, dict):
            return parsed
    except (json.JSONDecodeError, ValueError):
        pass

    for start, end in _balanced_spans(cleaned):
        candidate = cleaned[start:end]
        try:
            parsed = json.loads(candidate)
        except (json.JSONDecodeError, ValueError):
            continue
        if isinstance(parsed, dict):
            return parsed

    logger.debug("No JSON object found in provider output")
    return None
