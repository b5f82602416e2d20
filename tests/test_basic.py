"""
Basic tests for the content synthesis service.

This module checks model validation, configuration loading and that
every package imports.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from content_synthesis.core.models.content import GenerationRequest, ContentKind, ContentRecord
from content_synthesis.core.models.quality import QualityReport, ScoreDelta
from content_synthesis.utils.config import TestingConfig, get_config, validate_config


def test_generation_request_creation():
    """Test creating a generation request."""
    request = GenerationRequest(
        kind=ContentKind.LISTING,
        context={"folder": "yali-2+1", "price": 850000, "note": None}
    )

    assert request.kind == "listing"
    assert request.context == {"folder": "yali-2+1", "price": "850000", "note": ""}
    assert request.constraints.locale == "tr-TR"


def test_generation_request_is_immutable():
    request = GenerationRequest(kind="article")

    with pytest.raises(PydanticValidationError):
        request.kind = "qa"


def test_generation_request_validation():
    with pytest.raises(PydanticValidationError):
        GenerationRequest(kind="poem")


def test_quality_report_clamps_scores():
    report = QualityReport(humanLikeScore=130.4, aiProbability=-0.2)

    assert report.human_like_score == 100
    assert report.ai_probability == 0.0


def test_score_delta():
    assert ScoreDelta(before=40, after=38).improvement == -2


def test_record_row_flattens_attributes():
    row = ContentRecord(title="T", slug="t", body="b", attributes={"price_amount": 5000}).to_row()

    assert row["price_amount"] == 5000
    assert "attributes" not in row
    assert row["status"] == "published"
    assert isinstance(row["created_at"], str)


def test_config_loading():
    """Test configuration loading."""
    config = get_config('testing')

    assert config.TESTING is True
    assert config.DEBUG is True
    assert config.LOG_LEVEL == 'CRITICAL'
    assert config.PROVIDER_CHAIN == []


def test_config_validation():
    assert validate_config(TestingConfig()) == []

    problems = validate_config(TestingConfig(
        API_KEYS=frozenset(),
        PROVIDER_CHAIN=["openai"],
        IMPROVE_MIN_SCORE=120
    ))

    assert "API_KEYS must be configured" in problems
    assert "IMPROVE_MIN_SCORE must be between 0 and 100" in problems
    assert any("provider/model" in problem for problem in problems)


def test_provider_api_key_lookup():
    config = TestingConfig(GEMINI_API_KEY="g-key")

    assert config.provider_api_key("gemini") == "g-key"
    assert config.provider_api_key("ollama") is None


def test_imports():
    """Test that all modules can be imported."""
    from content_synthesis.api import create_app, run_app
    from content_synthesis.integrations.llm import ProviderRouter, build_router
    from content_synthesis.integrations.supabase import SupabaseStorage, SupabaseContentStore
    from content_synthesis.pipeline import GroupingOrchestrator, BatchRunner, ImprovementEngine
    from content_synthesis.tasks import celery_app

    assert callable(create_app)
    assert celery_app.main == 'content_synthesis'
