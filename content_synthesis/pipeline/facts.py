"""
Fact extraction from folder and topic names.

Operators name storage folders like ``yali-mahallesi-2+1-850000`` or
``aziziye/3+1 120m2 kiralik 15000``. The rules here turn such a name into a
FactBundle. Extraction is total: a rule that does not match leaves its
field empty instead of raising.
"""

import logging
import re
from decimal import Decimal
from typing import Optional

from ..core.models.content import FactBundle, ListingIntent
from ..utils.text import transliterate


logger = logging.getLogger(__name__)

# Matched against the transliterated, lowercased name
RENT_TOKENS = ('kiralik',)

NEIGHBORHOOD_SUFFIXES = ('-mahallesi', '-mahalle')

_PRICE_RE = re.compile(r'\d{6,}')
_ROOM_PLUS_RE = re.compile(r'(\d)\+(\d)')
# A bare two-digit token such as "21", unless it is an area like "85m2"
_ROOM_BARE_RE = re.compile(r'(?<!\d)(\d)(\d)(?!\d)(?!\s*(?:m2|m²|metrekare))', re.IGNORECASE)
_AREA_RE = re.compile(r'(\d+)\s*(?:m2|m²|metrekare)', re.IGNORECASE)


def extract_intent(raw_name: str) -> ListingIntent:
    folded = transliterate(raw_name)
    if any(token in folded for token in RENT_TOKENS):
        return ListingIntent.RENT
    return ListingIntent.SALE


def extract_price(raw_name: str) -> Optional[Decimal]:
    """The last run of six or more digits; trailing numbers are prices."""
    matches = _PRICE_RE.findall(raw_name)
    if not matches:
        return None
    return Decimal(matches[-1])


def extract_room_count(raw_name: str) -> Optional[int]:
    match = _ROOM_PLUS_RE.search(raw_name) or _ROOM_BARE_RE.search(raw_name)
    if not match:
        return None
    return int(match.group(1))


def extract_area(raw_name: str) -> Optional[int]:
    match = _AREA_RE.search(raw_name)
    if not match:
        return None
    return int(match.group(1))


def extract_neighborhood(raw_name: str) -> Optional[str]:
    if '/' in raw_name:
        first = raw_name.split('/')[0]
    else:
        first = raw_name.split('-')[0]

    for suffix in NEIGHBORHOOD_SUFFIXES:
        first = re.sub(re.escape(suffix), '', first, flags=re.IGNORECASE)

    first = first.strip()
    return first or None


def extract(raw_name: str) -> FactBundle:
    """
    Derive a FactBundle from a folder or topic name.

    Args:
        raw_name: Folder key or topic string

    Returns:
        FactBundle; fields with no matching pattern stay None
    """
    raw_name = raw_name or ''

    bundle = FactBundle(
        price=extract_price(raw_name),
        room_count=extract_room_count(raw_name),
        area_sqm=extract_area(raw_name),
        neighborhood=extract_neighborhood(raw_name),
        intent=extract_intent(raw_name)
    )

    logger.debug(f"Extracted facts from '{raw_name}': {bundle.present_fields()}")
    return bundle
