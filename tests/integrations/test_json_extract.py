"""
Tests for best-effort JSON extraction.
"""

import time

from content_synthesis.integrations.llm.json_extract import extract_json_object, strip_code_fences


def test_clean_json():
    assert extract_json_object('{"title": "Ev", "price": 850000}') == {"title": "Ev", "price": 850000}


def test_json_in_code_fence():
    text = '```json\n{"title": "Ev"}\n```'

    assert extract_json_object(text) == {"title": "Ev"}


def test_json_fenced_in_prose():
    text = 'Elbette! İşte ilan:\n```json\n{"title": "Ev", "body": "<p>a}b</p>"}\n```\nBaşka bir şey?'

    assert extract_json_object(text) == {"title": "Ev", "body": "<p>a}b</p>"}


def test_braces_inside_strings_do_not_end_object():
    text = 'prefix {"a": "{not closed", "b": {"c": 1}} suffix'

    assert extract_json_object(text) == {"a": "{not closed", "b": {"c": 1}}


def test_malformed_json_returns_none():
    assert extract_json_object('{"title": "Ev", "price": }') is None
    assert extract_json_object('{"title": "Ev"') is None
    assert extract_json_object("no json here") is None
    assert extract_json_object("") is None
    assert extract_json_object(None) is None


def test_skips_broken_candidate_and_takes_next():
    text = 'first {broken: json} then {"ok": true}'

    assert extract_json_object(text) == {"ok": True}


def test_top_level_array_is_not_an_object():
    assert extract_json_object('[1, 2, 3]') is None


def test_strip_code_fences_without_fence():
    assert strip_code_fences("  plain text ") == "plain text"


def test_unclosed_openers_do_not_hide_a_later_object():
    assert extract_json_object("{" * 5000 + '{"ok": true}') == {"ok": True}
    assert extract_json_object('{ stray } } {"a": {"b": 2}}') == {"a": {"b": 2}}


def test_many_unclosed_openers_return_none_quickly():
    started = time.monotonic()

    assert extract_json_object("{" * 50000) is None
    assert extract_json_object("{" * 20000 + "}" * 10) is None

    assert time.monotonic() - started < 2.0


def test_nested_span_is_not_a_separate_candidate():
    assert extract_json_object('{broken: {"inner": 1}}') is None
