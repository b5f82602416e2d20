"""
Local rewrite fallback: fixed phrase substitutions.
"""

import re
from typing import List, Tuple

from ..core.models.quality import ContentChange, ChangeType


# (phrase, replacement); an empty replacement deletes the phrase
PHRASE_SUBSTITUTIONS = (
    ('bu makalede', ''),
    ('bu yazıda', ''),
    ('özetlemek gerekirse', ''),
    ('sonuç olarak', 'Sonuçta'),
    ('kısacası', ''),
)


def _tidy(text: str) -> str:
    text = re.sub(r'[ \t]{2,}', ' ', text)
    text = re.sub(r'[ \t]+([,.;:!?])', r'\1', text)
    text = re.sub(r'(^|[.!?>]\s*),\s*', r'\1', text)
    text = re.sub(r'(>)[ \t]+', r'\1', text)
    text = re.sub(r'^[ \t]+', '', text, flags=re.MULTILINE)
    return text


def apply_substitutions(content: str) -> Tuple[str, List[ContentChange]]:
    """
    Delete or replace known filler phrases.

    Returns:
        The rewritten text and one change entry per substitution that
        actually matched
    """
    improved = content
    changes: List[ContentChange] = []

    for phrase, replacement in PHRASE_SUBSTITUTIONS:
        if replacement:
            pattern = re.compile(re.escape(phrase), re.IGNORECASE)
        else:
            # Swallow a trailing comma so "Bu yazıda, ..." does not leave ", ..."
            pattern = re.compile(re.escape(phrase) + r',?', re.IGNORECASE)

        improved, count = pattern.subn(replacement, improved)
        if not count:
            continue

        changes.append(ContentChange(
            type=ChangeType.REPLACED if replacement else ChangeType.REMOVED,
            original=phrase,
            improved=replacement or '(kaldırıldı)',
            reason=f"Generic ifade {'değiştirildi' if replacement else 'kaldırıldı'} ({count}x)"
        ))

    if changes:
        improved = _tidy(improved).strip()

    return improved, changes
