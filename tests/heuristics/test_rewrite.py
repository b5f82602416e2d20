"""
Tests for local phrase substitution.
"""

from content_synthesis.heuristics.rewrite import apply_substitutions
from tests.conftest import GOOD_CONTENT, POOR_CONTENT


def test_substitutions_record_one_change_per_phrase():
    improved, changes = apply_substitutions(POOR_CONTENT)

    assert "makalede" not in improved.lower()
    assert "bu yazıda" not in improved.lower()
    assert "Sonuçta" in improved
    assert [change.original for change in changes] == [
        "bu makalede", "bu yazıda", "sonuç olarak", "kısacası"
    ]
    assert {change.type for change in changes} == {"removed", "replaced"}


def test_no_match_leaves_content_untouched():
    improved, changes = apply_substitutions(GOOD_CONTENT)

    assert improved == GOOD_CONTENT
    assert changes == []


def test_trailing_comma_is_removed_with_phrase():
    improved, _ = apply_substitutions("Kısacası, ev denize yakın.")

    assert improved == "ev denize yakın."
