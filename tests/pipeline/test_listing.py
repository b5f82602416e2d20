"""
Tests for listing fact reconciliation and record assembly.
"""

from decimal import Decimal

from content_synthesis.core.models.content import FactBundle, GeneratedContent, MediaFile, MediaGroup
from content_synthesis.pipeline.facts import extract
from content_synthesis.pipeline.listing import ListingSynthesizer, reconcile


def _group(key="yali-mahallesi-2+1-850000", count=2):
    return MediaGroup(folder_key=key, files=[
        MediaFile(path=f"{key}/{i}.jpg", name=f"{i}.jpg", url=f"https://cdn.example.com/{key}/{i}.jpg")
        for i in range(count)
    ])


def test_folder_facts_override_model_facts():
    merged = reconcile(extract("yali-mahallesi-2+1-850000"), {
        "price": 999,
        "room_count": 5,
        "neighborhood": "Başka",
        "property_type": "villa",
        "floor": 3,
        "intent": "rent",
    })

    assert merged["price"] == Decimal(850000)
    assert merged["room_count"] == 2
    assert merged["neighborhood"] == "yali"
    assert merged["intent"] == "sale"
    assert merged["property_type"] == "villa"
    assert merged["floor"] == 3


def test_model_fills_fields_the_folder_lacks():
    merged = reconcile(FactBundle(), {"area_sqm": 120, "price": 2500000})

    assert merged["area_sqm"] == 120
    assert merged["price"] == 2500000


def test_defaults_depend_on_intent():
    sale = reconcile(FactBundle(), {})
    rent = reconcile(extract("kiralik"), {})

    assert sale["price"] == 1000000
    assert rent["price"] == 5000
    assert rent["intent"] == "rent"
    assert sale["neighborhood"] == "Merkez"
    assert sale["property_type"] == "daire"


def test_request_carries_folder_context():
    request = ListingSynthesizer(city="Karasu").build_request(extract("yali-mahallesi-2+1-850000"), _group())

    assert request.kind == "listing"
    assert request.context["price"] == "850000"
    assert request.context["room_count"] == "2"
    assert request.context["image_count"] == "2"
    assert request.context["file_names"] == "0.jpg, 1.jpg"
    assert request.context["city"] == "Karasu"


def test_record_attributes():
    generated = GeneratedContent(
        title="Yalı Satılık Daire",
        body="<p>Metin</p>",
        excerpt="Kısa",
        meta_description="Meta",
        keywords=["yali"]
    )
    merged = reconcile(extract("yali-mahallesi-2+1-850000"), {"floor": 2})

    record = ListingSynthesizer().build_record(generated, merged, _group(count=3), "yali-satilik-daire")
    row = record.to_row()

    assert row["category"] == "listing"
    assert row["slug"] == "yali-satilik-daire"
    assert row["price_amount"] == 850000
    assert row["price_currency"] == "TRY"
    assert row["features"] == {"room_count": 2, "floor": 2}
    assert [img["order"] for img in row["images"]] == [0, 1, 2]
    assert row["images"][1]["alt"] == "Yalı Satılık Daire - 2"
    assert row["source_folder"] == "yali-mahallesi-2+1-850000"
    assert row["location_city"] == "Karasu"
