"""
Listing synthesis from an image group.

Builds the generation request from folder facts, reconciles the facts
with whatever the model inferred and assembles the listing record.
Facts taken from the folder name always win over model output.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List

from ..core.models.content import (
    ContentKind, ContentRecord, FactBundle, GeneratedContent, GenerationConstraints,
    GenerationRequest, ListingIntent, MediaGroup
)


logger = logging.getLogger(__name__)

DEFAULT_RENT_PRICE = 5000
DEFAULT_SALE_PRICE = 1000000
DEFAULT_NEIGHBORHOOD = "Merkez"
DEFAULT_PROPERTY_TYPE = "daire"
CURRENCY = "TRY"

RECONCILED_FIELDS = ("price", "room_count", "area_sqm", "neighborhood", "intent")
FEATURE_FIELDS = ("room_count", "area_sqm", "floor", "building_age")


def reconcile(facts: FactBundle, model_facts: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge folder facts over model facts, then apply defaults.

    Args:
        facts: Facts extracted from the folder name
        model_facts: Facts the provider inferred

    Returns:
        Merged fact dictionary with price, intent, neighborhood and
        property_type always set
    """
    merged = {k: v for k, v in model_facts.items() if v is not None}

    for name, value in facts.present_fields().items():
        if name in RECONCILED_FIELDS:
            merged[name] = value

    intent = merged.get("intent") or ListingIntent.SALE.value
    merged["intent"] = intent

    if merged.get("price") is None:
        merged["price"] = DEFAULT_RENT_PRICE if intent == ListingIntent.RENT.value else DEFAULT_SALE_PRICE
    merged.setdefault("neighborhood", DEFAULT_NEIGHBORHOOD)
    merged.setdefault("property_type", DEFAULT_PROPERTY_TYPE)

    return merged


def _price_amount(value: Any):
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def build_images(group: MediaGroup, title: str) -> List[Dict[str, Any]]:
    """Ordered image entries for the listing record."""
    return [
        {
            "url": media.url,
            "public_id": media.path,
            "alt": f"{title} - {index + 1}",
            "order": index,
        }
        for index, media in enumerate(group.files)
    ]


class ListingSynthesizer:
    """Turns an image group into a generation request and a listing record."""

    def __init__(self, city: str = "Karasu", locale: str = "tr-TR", target_word_count: int = 600):
        self.city = city
        self.locale = locale
        self.target_word_count = target_word_count

    def build_request(self, facts: FactBundle, group: MediaGroup) -> GenerationRequest:
        """
        Build the generation request for one group.

        Args:
            facts: Facts from the folder key
            group: The image group

        Returns:
            Immutable GenerationRequest of kind listing
        """
        context = {
            "folder": group.folder_key,
            "city": self.city,
            "image_count": len(group.files),
            "file_names": ", ".join(group.file_names[:10]),
        }
        context.update({k: _price_amount(v) for k, v in facts.present_fields().items()})

        return GenerationRequest(
            kind=ContentKind.LISTING,
            context=context,
            constraints=GenerationConstraints(
                target_word_count=self.target_word_count,
                locale=self.locale
            )
        )

    def build_record(self, generated: GeneratedContent, merged: Dict[str, Any],
                     group: MediaGroup, slug: str) -> ContentRecord:
        """
        Assemble the persisted listing.

        Args:
            generated: Provider or template output
            merged: Reconciled facts
            group: Source image group
            slug: Unique slug

        Returns:
            ContentRecord with listing attributes
        """
        features = {name: merged[name] for name in FEATURE_FIELDS if merged.get(name) is not None}

        attributes = {
            "intent": merged["intent"],
            "property_type": merged["property_type"],
            "location_neighborhood": merged["neighborhood"],
            "location_city": self.city,
            "location_district": self.city,
            "price_amount": _price_amount(merged["price"]),
            "price_currency": CURRENCY,
            "features": features,
            "images": build_images(group, generated.title),
            "source_folder": group.folder_key,
        }

        return ContentRecord(
            title=generated.title,
            slug=slug,
            body=generated.body,
            excerpt=generated.excerpt,
            meta_description=generated.meta_description,
            keywords=generated.keywords,
            category=ContentKind.LISTING.value,
            attributes=attributes
        )
