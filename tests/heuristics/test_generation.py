"""
Tests for the local template generator.
"""

from content_synthesis.core.models.content import GenerationRequest
from content_synthesis.heuristics.generation import generate_locally, format_price


def test_format_price_groups_thousands():
    assert format_price("850000") == "850.000"
    assert format_price(None) is None
    assert format_price("abc") is None


def test_listing_template_uses_facts():
    request = GenerationRequest(kind="listing", context={
        "neighborhood": "yali", "intent": "rent", "price": 15000, "room_count": 2
    })

    content = generate_locally(request)

    assert content.title == "Yali Mahallesi Kiralık 2+1 Daire"
    assert "15.000 TL" in content.excerpt
    assert content.body.startswith("<p>")
    assert content.provider == "local"


def test_listing_template_defaults_neighborhood():
    content = generate_locally(GenerationRequest(kind="listing"))

    assert content.title.startswith("Merkez Mahallesi Satılık")


def test_article_and_qa_templates():
    article = generate_locally(GenerationRequest(kind="article", context={"topic": "karasu plajları"}))
    qa = generate_locally(GenerationRequest(kind="qa", context={"question": "Karasu'da kira ne kadar"}))

    assert article.title == "Karasu Plajları"
    assert qa.title.endswith("?")
    assert article.meta_description and qa.meta_description
