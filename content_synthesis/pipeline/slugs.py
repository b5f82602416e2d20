"""
Slug derivation and uniqueness.
"""

import logging
import re
import time
from typing import Any, Callable, Optional

from ..utils.text import transliterate


logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 100
FALLBACK_SLUG = "icerik"

_NON_ALNUM_RE = re.compile(r'[^a-z0-9]+')


def resolve(title: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Turn a title into a URL-safe slug.

    Lowercases, maps Turkish diacritics to ASCII and collapses every run of
    other characters into one hyphen. Over-long slugs are cut at the last
    hyphen before the limit when that hyphen lies past half of it, otherwise
    hard-cut.

    Args:
        title: Source title
        max_length: Maximum slug length

    Returns:
        Slug, possibly empty if the title has no alphanumerics
    """
    slug = _NON_ALNUM_RE.sub('-', transliterate(title or '')).strip('-')

    if len(slug) <= max_length:
        return slug

    cut = slug[:max_length]
    last_hyphen = cut.rfind('-')
    if last_hyphen > max_length * 0.5:
        return cut[:last_hyphen]
    return cut.rstrip('-')


def _nanosecond_clock() -> int:
    return time.time_ns()


def ensure_unique(
    slug: str,
    lookup: Callable[[str], Optional[Any]],
    clock: Callable[[], int] = _nanosecond_clock
) -> str:
    """
    Make a slug unique against the datastore.

    A single lookup is made; on collision the slug gets a timestamp suffix,
    which is unique per call in a single-writer process.

    Args:
        slug: Candidate slug
        lookup: Returns the existing record for a slug, or None
        clock: Source of the disambiguating suffix

    Returns:
        The candidate or the suffixed slug
    """
    slug = slug or FALLBACK_SLUG

    if lookup(slug) is None:
        return slug

    unique = f"{slug}-{clock()}"
    logger.info(f"Slug '{slug}' already exists, using '{unique}'")
    return unique
