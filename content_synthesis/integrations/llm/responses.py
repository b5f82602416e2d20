"""
Validation of structured provider payloads.

A payload that lacks a required field is a provider failure: the router
moves on to the next adapter instead of accepting partial content.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from ...core.models.content import GeneratedContent
from ...core.models.errors import InvalidResponseError
from ...core.models.quality import QualityReport, IssueType, Severity


# Alternate keys providers commonly use for the same field
_FIELD_ALIASES = {
    "title": ("title",),
    "body": ("body", "description_long", "content"),
    "excerpt": ("excerpt", "description_short", "summary"),
    "meta_description": ("meta_description", "metaDescription"),
    "keywords": ("keywords", "tags"),
}

_FACT_ALIASES = {
    "price": ("price",),
    "room_count": ("room_count", "roomCount", "rooms"),
    "area_sqm": ("area_sqm", "areaSqm", "area"),
    "neighborhood": ("neighborhood", "location_neighborhood"),
    "property_type": ("property_type", "propertyType"),
    "floor": ("floor",),
    "building_age": ("building_age", "buildingAge"),
    "intent": ("intent", "status"),
}

REQUIRED_FIELDS = ("title", "body", "excerpt", "meta_description")

_ISSUE_TYPES = {t.value for t in IssueType}
_SEVERITIES = {s.value for s in Severity}


def _pick(payload: Dict[str, Any], keys) -> Any:
    for key in keys:
        value = payload.get(key)
        if value not in (None, ""):
            return value
    return None


# Grouped thousands (1.250.000 or 1,250,000) with an optional decimal
# tail, or a plain number with an optional decimal part
_NUMBER_RE = re.compile(
    r'(?<![\d.,])(?:(\d{1,3}(?:\.\d{3})+|\d{1,3}(?:,\d{3})+)(?:[.,]\d+)?(?!\d)'
    r'|(\d+(?:[.,]\d+)?))'
)


def _to_int(value: Any) -> Optional[int]:
    """
    Integer part of a number or of the first number in a string.

    '1.250.000' and '1,250,000' are grouped thousands, '2500000.00' and
    '120,5' are decimals, '2+1' and '120 m2' yield their leading number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    match = _NUMBER_RE.search(str(value))
    if not match:
        return None
    if match.group(1):
        return int(re.sub(r'[.,]', '', match.group(1)))
    try:
        return int(Decimal(match.group(2).replace(',', '.')))
    except InvalidOperation:
        return None


def normalize_facts(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Pull listing facts out of a provider payload.

    Numeric facts are coerced to integers; unknown or empty values are
    left out rather than stored as None.
    """
    facts: Dict[str, Any] = {}
    for name, keys in _FACT_ALIASES.items():
        value = _pick(payload, keys)
        if value is None:
            continue
        if name in ("price", "room_count", "area_sqm", "floor", "building_age"):
            value = _to_int(value)
            if value is None:
                continue
        elif name == "intent":
            value = str(value).strip().lower()
            if value not in ("sale", "rent"):
                continue
        else:
            value = str(value).strip()
            if not value:
                continue
        facts[name] = value
    return facts


def parse_generated_content(payload: Dict[str, Any], provider: str = None) -> GeneratedContent:
    """
    Build GeneratedContent from a provider payload.

    Raises:
        InvalidResponseError: If a required field is missing or empty
    """
    fields = {name: _pick(payload, keys) for name, keys in _FIELD_ALIASES.items()}
    missing = [name for name in REQUIRED_FIELDS if not str(fields[name] or "").strip()]
    if missing:
        raise InvalidResponseError(
            f"Generated content is missing required fields: {', '.join(missing)}",
            provider=provider,
            missing=missing
        )

    try:
        return GeneratedContent(
            title=str(fields["title"]).strip(),
            body=str(fields["body"]).strip(),
            excerpt=str(fields["excerpt"]).strip(),
            meta_description=str(fields["meta_description"]).strip(),
            keywords=fields["keywords"],
            facts=normalize_facts(payload),
            provider=provider
        )
    except PydanticValidationError as e:
        raise InvalidResponseError(f"Generated content failed validation: {e}", provider=provider)


def parse_quality_report(payload: Dict[str, Any], provider: str = None) -> QualityReport:
    """
    Build a QualityReport from a provider payload.

    Raises:
        InvalidResponseError: If the score fields are missing or invalid
    """
    if payload.get("humanLikeScore") is None and payload.get("human_like_score") is None:
        raise InvalidResponseError("Analysis is missing humanLikeScore",
                                   provider=provider, missing=["humanLikeScore"])

    data = dict(payload)
    data.setdefault("aiProbability", data.pop("ai_probability", 0.5))
    if "human_like_score" in data and "humanLikeScore" not in data:
        data["humanLikeScore"] = data.pop("human_like_score")
    data["source"] = provider or "provider"

    # Drop malformed issues instead of rejecting the whole report
    issues = []
    for issue in data.get("issues") or []:
        if (isinstance(issue, dict) and issue.get("message")
                and issue.get("type") in _ISSUE_TYPES and issue.get("severity") in _SEVERITIES):
            issue = dict(issue)
            if not isinstance(issue.get("location"), int) or issue["location"] < 0:
                issue.pop("location", None)
            issues.append(issue)
    data["issues"] = issues

    try:
        return QualityReport.model_validate(data)
    except (PydanticValidationError, TypeError, ValueError) as e:
        raise InvalidResponseError(f"Analysis failed validation: {e}", provider=provider)
