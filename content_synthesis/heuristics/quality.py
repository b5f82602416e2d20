"""
Local, provider-free quality analysis.

Scores content on word and sentence statistics alone. The result depends
only on the input text, so identical input always yields an identical
report.
"""

from collections import Counter
from typing import List, Tuple

from ..core.models.quality import QualityReport, QualityIssue, IssueType, Severity
from ..utils.text import strip_markup, split_words, split_sentences, transliterate


# Filler phrases typical of machine-written Turkish copy
GENERIC_PHRASES = (
    'bu makalede',
    'bu yazıda',
    'özetlemek gerekirse',
    'sonuç olarak',
    'kısacası',
    'birçok kişi',
    'çoğu insan',
    'genellikle',
)

GENERIC_ISSUE_THRESHOLD = 3
GENERIC_HIGH_THRESHOLD = 5
REPEAT_WORD_LIMIT = 5
REPEAT_HIGH_THRESHOLD = 3
LONG_SENTENCE_WORDS = 25
GOOD_SENTENCE_RANGE = (10, 20)

BASE_SCORE = 70
BASE_AI_PROBABILITY = 0.3
GENERIC_PENALTY = (20, 0.3)
REPETITION_PENALTY = (15, 0.2)
STRUCTURE_PENALTY = (10, 0.1)
REMEDIATION_SCORE = 60

REMEDIATION_SUGGESTIONS = [
    'İçeriği daha doğal ve özgün hale getirin',
    'Generic ifadeleri kaldırın',
    'Cümle yapılarını çeşitlendirin',
]


def count_generic_phrases(text: str) -> Tuple[int, int]:
    """
    Return (occurrences, offset of the first one or -1).

    Text and phrases are both folded to ASCII lowercase, so "BU YAZIDA"
    matches "bu yazıda".
    """
    folded = transliterate(text)
    count = 0
    first = -1
    for phrase in GENERIC_PHRASES:
        needle = transliterate(phrase)
        occurrences = folded.count(needle)
        if occurrences:
            count += occurrences
            position = folded.find(needle)
            if first == -1 or position < first:
                first = position
    return count, first


def repeated_words(words: List[str]) -> List[Tuple[str, int]]:
    """Words used more than REPEAT_WORD_LIMIT times, most frequent first."""
    frequencies = Counter(word.lower() for word in words)
    repeated = [(word, n) for word, n in frequencies.items() if n > REPEAT_WORD_LIMIT]
    return sorted(repeated, key=lambda item: (-item[1], item[0]))


def analyze_locally(content: str, title: str = "") -> QualityReport:
    """
    Score content without calling any provider.

    Args:
        content: Plain text or HTML
        title: Content title (informational)

    Returns:
        QualityReport with source 'local'
    """
    text = strip_markup(content)
    words = split_words(text)
    sentences = split_sentences(text)

    issues: List[QualityIssue] = []
    strengths: List[str] = []
    suggestions: List[str] = []

    score = BASE_SCORE
    probability = BASE_AI_PROBABILITY

    generic_count, first_generic = count_generic_phrases(text)
    if generic_count >= GENERIC_ISSUE_THRESHOLD:
        issues.append(QualityIssue(
            type=IssueType.GENERIC_PHRASE,
            severity=Severity.HIGH if generic_count >= GENERIC_HIGH_THRESHOLD else Severity.MEDIUM,
            message=f"{generic_count} adet generic ifade tespit edildi",
            suggestion="Generic ifadeleri kaldırın ve daha özgün ifadeler kullanın",
            location=first_generic if first_generic >= 0 else None
        ))
        score -= GENERIC_PENALTY[0]
        probability += GENERIC_PENALTY[1]

    repeated = repeated_words(words)
    if repeated:
        issues.append(QualityIssue(
            type=IssueType.REPETITION,
            severity=Severity.HIGH if len(repeated) >= REPEAT_HIGH_THRESHOLD else Severity.MEDIUM,
            message=f"{len(repeated)} kelime çok fazla tekrar ediyor: "
                    + ", ".join(word for word, _ in repeated[:5]),
            suggestion="Tekrar eden kelimeleri eş anlamlılarıyla değiştirin"
        ))
        score -= REPETITION_PENALTY[0]
        probability += REPETITION_PENALTY[1]

    avg_sentence_length = len(words) / len(sentences) if sentences else 0.0
    if avg_sentence_length > LONG_SENTENCE_WORDS:
        issues.append(QualityIssue(
            type=IssueType.STRUCTURE,
            severity=Severity.MEDIUM,
            message=f"Cümleler çok uzun (ortalama {avg_sentence_length:.1f} kelime)",
            suggestion="Cümleleri kısaltın ve daha okunabilir hale getirin"
        ))
        score -= STRUCTURE_PENALTY[0]
        probability += STRUCTURE_PENALTY[1]
    elif GOOD_SENTENCE_RANGE[0] <= avg_sentence_length <= GOOD_SENTENCE_RANGE[1]:
        strengths.append("İyi cümle uzunluğu")

    score = max(0, min(100, score))
    probability = round(max(0.0, min(1.0, probability)), 2)

    if score < REMEDIATION_SCORE:
        suggestions.extend(REMEDIATION_SUGGESTIONS)

    return QualityReport(
        human_like_score=score,
        ai_probability=probability,
        issues=issues,
        strengths=strengths,
        suggestions=suggestions,
        source="local"
    )
