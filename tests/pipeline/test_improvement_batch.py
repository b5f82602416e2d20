"""
Tests for the improvement batch runner.
"""

import pytest

from content_synthesis.core.models.errors import ValidationError
from content_synthesis.integrations.llm.router import ProviderRouter
from content_synthesis.pipeline.batch import ImprovementBatchRunner
from content_synthesis.pipeline.improvement import ImprovementEngine
from content_synthesis.pipeline.quality import QualityAnalyzer
from tests.conftest import POOR_CONTENT
from tests.fakes import StopAfter


class ExplodingAnalyzer(QualityAnalyzer):
    def analyze(self, content, title=""):
        if "PATLA" in content:
            raise RuntimeError("analysis exploded")
        return super().analyze(content, title)


@pytest.fixture
def runner(content_stores, no_sleep):
    _, sleep = no_sleep
    content_stores["news"].rows["n1"] = {"id": "n1", "title": "Haber", "emlak_analysis": "PATLA metin"}
    analyzer = ExplodingAnalyzer(ProviderRouter([]))
    return ImprovementBatchRunner(analyzer, ImprovementEngine(analyzer), content_stores,
                                  delay=2.0, sleep=sleep)


def test_counts_improved_skipped_and_errors(runner, content_stores, no_sleep):
    result = runner.run(sources=["articles", "news"])

    assert (result.improved, result.skipped, result.errors, result.total) == (1, 1, 1, 3)
    assert result.message == "1 improved, 1 skipped, 1 errors"
    assert no_sleep[0] == [2.0, 2.0]

    updates = content_stores["articles"].updates
    assert [record_id for record_id, _ in updates] == ["a1"]
    assert "makalede" not in updates[0][1]["content"]
    assert "updated_at" in updates[0][1]

    outcomes = {item.id: item.outcome for item in result.items}
    assert outcomes == {"a1": "improved", "a2": "skipped", "n1": "error"}


def test_dry_run_persists_nothing(runner, content_stores):
    result = runner.run(sources=["articles"], dry_run=True)

    assert result.improved == 1
    assert result.dry_run is True
    assert result.message.endswith("(dry run)")
    assert content_stores["articles"].updates == []
    assert content_stores["articles"].rows["a1"]["content"] == POOR_CONTENT


def test_min_score_threshold(runner):
    result = runner.run(sources=["articles"], min_score=40)

    assert result.improved == 0
    assert result.skipped == 2


def test_limit_applies_per_source(runner):
    result = runner.run(sources=["articles"], limit=1)

    assert result.total == 1


def test_unknown_source_is_rejected(runner):
    with pytest.raises(ValidationError):
        runner.run(sources=["blog"])


def test_stop_event(runner):
    result = runner.run(sources=["articles"], stop_event=StopAfter(1))

    assert result.stopped_early is True
    assert len(result.items) == 1
