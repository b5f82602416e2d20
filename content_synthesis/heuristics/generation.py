"""
Local template generator.

The last link of the provider chain. Fills Turkish templates from the
request context and never raises for any well-formed GenerationRequest.
"""

from typing import Dict, List, Optional

from ..core.models.content import GenerationRequest, GeneratedContent, ContentKind, ListingIntent


LOCAL_SOURCE = "local"

DEFAULT_NEIGHBORHOOD = "Merkez"
DEFAULT_CITY = "Karasu"
META_DESCRIPTION_LIMIT = 160


def format_price(value: Optional[str]) -> Optional[str]:
    """Group digits the tr-TR way: 850000 -> 850.000"""
    if not value:
        return None
    try:
        amount = int(float(value))
    except (TypeError, ValueError):
        return None
    return f"{amount:,}".replace(",", ".")


def _display_name(value: str) -> str:
    return " ".join(part[:1].upper() + part[1:] for part in value.replace("-", " ").split())


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    cut = text[:limit - 1].rsplit(" ", 1)[0]
    return cut.rstrip(" ,.;:-") + "…"


def _listing(context: Dict[str, str]) -> GeneratedContent:
    neighborhood = _display_name(context.get("neighborhood") or DEFAULT_NEIGHBORHOOD)
    city = context.get("city") or DEFAULT_CITY
    is_rent = context.get("intent") == ListingIntent.RENT.value
    intent_title = "Kiralık" if is_rent else "Satılık"
    intent_word = "kiralık" if is_rent else "satılık"
    property_type = context.get("property_type") or "daire"
    price = format_price(context.get("price"))
    rooms = context.get("room_count")
    area = context.get("area_sqm")

    title_parts = [f"{neighborhood} Mahallesi", intent_title]
    if rooms:
        title_parts.append(f"{rooms}+1")
    if area:
        title_parts.append(f"{area} m²")
    title_parts.append(_display_name(property_type))
    title = " ".join(title_parts)

    excerpt = f"{neighborhood} Mahallesi'nde {intent_word} emlak fırsatı"
    if price:
        excerpt += f" - {price} TL"

    features: List[str] = []
    if rooms:
        features.append(f"{rooms}+1 oda düzeni")
    if area:
        features.append(f"{area} m² kullanım alanı")

    paragraphs = [
        f"{city} {neighborhood} Mahallesi'nde {intent_word} {property_type}.",
    ]
    if features:
        paragraphs.append("Öne çıkan özellikler: " + ", ".join(features) + ".")
    if price:
        paragraphs.append(f"Fiyat: {price} TL.")
    image_count = context.get("image_count")
    if image_count and image_count != "0":
        paragraphs.append(f"İlanda {image_count} fotoğraf yer alıyor.")
    paragraphs.append("Detaylı bilgi ve yerinde görüntüleme için bizimle iletişime geçin.")

    body = "".join(f"<p>{p}</p>" for p in paragraphs)

    keywords = [
        f"{neighborhood.lower()} {intent_word} {property_type}",
        f"{city.lower()} {intent_word} emlak",
        f"{city.lower()} {neighborhood.lower()}",
    ]

    return GeneratedContent(
        title=title,
        body=body,
        excerpt=excerpt,
        meta_description=_truncate(excerpt + ". " + paragraphs[0], META_DESCRIPTION_LIMIT),
        keywords=keywords,
        facts={},
        provider=LOCAL_SOURCE
    )


def _article(context: Dict[str, str], kind: str) -> GeneratedContent:
    topic = (context.get("topic") or context.get("question") or context.get("title")
             or context.get("prompt") or "Karasu").strip()
    city = context.get("city") or DEFAULT_CITY
    category = context.get("category") or ""
    keywords = [k.strip() for k in (context.get("keywords") or "").split(",") if k.strip()]

    if kind == ContentKind.QA.value:
        title = topic if topic.endswith("?") else f"{topic}?"
        paragraphs = [
            f"{topic.rstrip('?')} sorusu {city} hakkında sık sorulan sorulardan biri.",
            "Kısa cevap: koşullar bölgeye, bütçeye ve zamanlamaya göre değişir.",
            "Güncel bilgi için yerel uzmanlarımızla görüşebilirsiniz.",
        ]
    else:
        title = _display_name(topic) if topic.islower() else topic
        paragraphs = [
            f"{topic} konusunu {city} özelinde ele alıyoruz.",
            "Bölgedeki güncel durum, dikkat edilmesi gereken noktalar ve pratik öneriler aşağıda.",
        ]
        if category:
            paragraphs.append(f"Bu içerik {category} kategorisinde yer alıyor.")
        paragraphs.append("Sorularınız için ekibimize her zaman ulaşabilirsiniz.")

    body = "".join(f"<p>{p}</p>" for p in paragraphs)
    excerpt = paragraphs[0]
    if not keywords:
        keywords = [topic.lower(), city.lower()]

    return GeneratedContent(
        title=title,
        body=body,
        excerpt=excerpt,
        meta_description=_truncate(excerpt, META_DESCRIPTION_LIMIT),
        keywords=keywords,
        facts={},
        provider=LOCAL_SOURCE
    )


def generate_locally(request: GenerationRequest) -> GeneratedContent:
    """
    Produce template content for a request.

    Args:
        request: Generation request

    Returns:
        GeneratedContent with provider 'local'
    """
    if request.kind == ContentKind.LISTING.value:
        return _listing(request.context)
    return _article(request.context, request.kind)
