"""
Prompt templates for generation, analysis and rewriting.

Prompts are Turkish because the platform's content is Turkish; the
expected JSON keys are fixed English identifiers.
"""

from typing import Dict

from ...core.models.content import GenerationRequest, ContentKind
from ...core.models.llm import ProviderRequest, ResponseShape
from ...core.models.quality import QualityReport


ANALYSIS_CONTENT_LIMIT = 4000
REWRITE_CONTENT_LIMIT = 8000

GENERATION_SYSTEM_PROMPTS: Dict[str, str] = {
    ContentKind.LISTING.value: (
        "Sen bir emlak ilanı uzmanısın. Verilen bilgilerden SEO uyumlu, profesyonel "
        "emlak ilanları oluşturursun. Türkçe yanıt verirsin. Sadece geçerli JSON döndür."
    ),
    ContentKind.ARTICLE.value: (
        "Sen deneyimli bir emlak ve yerel rehber editörüsün. Doğal, özgün ve bilgi "
        "değeri yüksek Türkçe blog yazıları yazarsın. Sadece geçerli JSON döndür."
    ),
    ContentKind.QA.value: (
        "Sen sık sorulan soruları net ve samimi bir dille yanıtlayan bir uzmansın. "
        "Türkçe yanıt verirsin. Sadece geçerli JSON döndür."
    ),
    ContentKind.CUSTOM.value: (
        "Sen bir içerik editörüsün. Türkçe yanıt verirsin. Sadece geçerli JSON döndür."
    ),
}

ANALYSIS_SYSTEM_PROMPT = (
    "Sen bir içerik kalite analiz uzmanısın. Sadece geçerli JSON formatında yanıt ver."
)

REWRITE_SYSTEM_PROMPT = (
    "Sen bir içerik editörüsün. Sadece iyileştirilmiş içeriği döndür, ek açıklama yapma."
)

_CONTENT_SCHEMA = """{
  "title": "...",
  "body": "HTML, <p> etiketleri ile",
  "excerpt": "150-200 karakter",
  "meta_description": "en fazla 160 karakter",
  "keywords": ["...", "..."]%s
}"""

_LISTING_FACT_SCHEMA = """,
  "intent": "sale veya rent",
  "property_type": "daire, villa, yazlık, müstakil ev, arsa, işyeri, dükkan",
  "neighborhood": "...",
  "price": sayı,
  "room_count": sayı veya null,
  "area_sqm": sayı veya null,
  "floor": sayı veya null,
  "building_age": sayı veya null"""


def _context_lines(context: Dict[str, str]) -> str:
    return "\n".join(f"- {key}: {value}" for key, value in sorted(context.items()) if value)


def _listing_prompt(request: GenerationRequest) -> str:
    context = request.context
    must_use = []
    if context.get("price"):
        must_use.append(f"fiyat için mutlaka {context['price']} kullan")
    if context.get("room_count"):
        must_use.append(f"oda sayısı için mutlaka {context['room_count']} kullan")
    if context.get("area_sqm"):
        must_use.append(f"metrekare için mutlaka {context['area_sqm']} kullan")
    if context.get("neighborhood"):
        must_use.append(f"mahalle için {context['neighborhood']} kullan")

    return f"""Klasör bilgilerinden bir emlak ilanı oluştur.

Bağlam:
{_context_lines(context)}

Kurallar:
- Başlık SEO uyumlu olmalı, 60-70 karakter, "Mahalle + Özellikler + Fiyat" formatında
- Uzun açıklama yaklaşık {request.constraints.target_word_count} kelime, HTML <p> etiketleri ile
- room_count sadece sayı olmalı (örn: 2), "2+1" formatı değil
- Mahalle ismini baş harfi büyük yaz
{chr(10).join('- ' + rule for rule in must_use)}

JSON formatında döndür:
{_CONTENT_SCHEMA % _LISTING_FACT_SCHEMA}
"""


def _article_prompt(request: GenerationRequest) -> str:
    label = {
        ContentKind.ARTICLE.value: "bir blog yazısı",
        ContentKind.QA.value: "bir soru-cevap içeriği",
    }.get(request.kind, "bir içerik")

    return f"""Aşağıdaki bağlama göre {label} yaz.

Bağlam:
{_context_lines(request.context)}

Kurallar:
- Yaklaşık {request.constraints.target_word_count} kelime
- Dil: {request.constraints.locale}
- "Bu makalede", "sonuç olarak", "kısacası" gibi kalıp ifadeler kullanma
- Cümle uzunluklarını çeşitlendir

JSON formatında döndür:
{_CONTENT_SCHEMA % ''}
"""


def build_generation_request(request: GenerationRequest) -> ProviderRequest:
    """Translate a GenerationRequest into the uniform provider call."""
    if request.kind == ContentKind.LISTING.value:
        user_prompt = _listing_prompt(request)
    else:
        user_prompt = _article_prompt(request)

    return ProviderRequest(
        system_instructions=GENERATION_SYSTEM_PROMPTS.get(
            request.kind, GENERATION_SYSTEM_PROMPTS[ContentKind.CUSTOM.value]
        ),
        user_prompt=user_prompt,
        response_shape=ResponseShape.JSON,
        temperature=0.7,
        max_output_size=max(2000, request.constraints.target_word_count * 4)
    )


def build_analysis_request(content: str, title: str) -> ProviderRequest:
    """Ask a provider to score content."""
    truncated = content[:ANALYSIS_CONTENT_LIMIT]

    user_prompt = f"""Aşağıdaki Türkçe içeriği analiz et ve JSON formatında detaylı bir rapor hazırla.

Yazı Başlığı: {title}
İçerik: {truncated}

Analiz kriterleri:
1. İnsan yazısı gibi görünme skoru (0-100, yüksek = daha doğal)
2. AI yazısı olma olasılığı (0-1, yüksek = AI yazısı gibi)
3. Tespit edilen sorunlar (generic-phrase, repetition, structure, tone, uniqueness)
4. Güçlü yönler
5. İyileştirme önerileri

JSON formatı:
{{
  "humanLikeScore": 0-100,
  "aiProbability": 0-1,
  "issues": [
    {{
      "type": "generic-phrase|repetition|structure|tone|uniqueness",
      "severity": "low|medium|high",
      "message": "Sorun açıklaması",
      "suggestion": "Öneri",
      "location": karakter pozisyonu (opsiyonel)
    }}
  ],
  "strengths": ["..."],
  "suggestions": ["..."]
}}"""

    return ProviderRequest(
        system_instructions=ANALYSIS_SYSTEM_PROMPT,
        user_prompt=user_prompt,
        response_shape=ResponseShape.JSON,
        temperature=0.3,
        max_output_size=2000
    )


def build_rewrite_request(content: str, title: str, analysis: QualityReport) -> ProviderRequest:
    """Ask a provider to rewrite content, embedding the analysis as instructions."""
    issue_lines = "\n".join(
        f"- {issue.message}: {issue.suggestion}" for issue in analysis.issues
    ) or "- Belirgin bir sorun tespit edilmedi"
    suggestion_lines = "\n".join(f"- {s}" for s in analysis.suggestions) or "- Yok"

    user_prompt = f"""Aşağıdaki Türkçe içeriği analiz sonuçlarına göre iyileştir.

Yazı Başlığı: {title}
Orijinal İçerik:
{content[:REWRITE_CONTENT_LIMIT]}

Mevcut İnsan Yazısı Skoru: {analysis.human_like_score}/100
Tespit Edilen Sorunlar:
{issue_lines}

İyileştirme Önerileri:
{suggestion_lines}

Görevler:
1. Generic ifadeleri kaldır ve daha özgün ifadeler kullan
2. Tekrar eden kelimeleri eş anlamlılarıyla değiştir
3. Cümle yapılarını çeşitlendir (kısa + uzun karışımı)
4. Daha samimi ve doğal bir ton kullan

ÖNEMLİ:
- İçeriğin anlamını ve bilgi değerini koru
- HTML etiketlerini koru (varsa)
- Sadece iyileştirilmiş içeriği döndür, ek açıklama yapma
- Orijinal içeriğin uzunluğuna yakın tut"""

    return ProviderRequest(
        system_instructions=REWRITE_SYSTEM_PROMPT,
        user_prompt=user_prompt,
        response_shape=ResponseShape.TEXT,
        temperature=0.7,
        max_output_size=4000
    )
