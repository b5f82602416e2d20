"""
Text helpers shared by the extractor, the slug resolver and the analyzers.
"""

import re
from typing import List

# Turkish letters outside ASCII, both cases
_TRANSLITERATION = str.maketrans({
    'ğ': 'g', 'ü': 'u', 'ş': 's', 'ı': 'i', 'ö': 'o', 'ç': 'c',
    'Ğ': 'g', 'Ü': 'u', 'Ş': 's', 'İ': 'i', 'Ö': 'o', 'Ç': 'c',
})

_TAG_RE = re.compile(r'<[^>]*>')
_SENTENCE_SPLIT_RE = re.compile(r'[.!?]+')


def transliterate(text: str) -> str:
    """Map the Turkish diacritic set to ASCII and lowercase."""
    # Translate before lower(): 'İ'.lower() yields 'i' plus a combining dot
    return text.translate(_TRANSLITERATION).lower()


def strip_markup(content: str) -> str:
    """Replace tags with spaces and trim."""
    return _TAG_RE.sub(' ', content or '').strip()


def split_words(text: str) -> List[str]:
    return [w for w in text.split() if w]


def split_sentences(text: str) -> List[str]:
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]
