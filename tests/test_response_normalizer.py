"""
Tests for recovering JSON payloads from free-text service replies.
"""

import json

import pytest

from core.entities import ParseEmpty, ParseOk
from core.response_normalizer import (
    EMPTY_ARRAY,
    EMPTY_OBJECT,
    extract_array,
    extract_object,
    parse_array,
    parse_object,
)


class TestExtractArray:
    def test_plain_array(self):
        raw = '[{"claim": "The Eiffel Tower is 330 metres tall.", "type": "general"}]'
        assert json.loads(extract_array(raw)) == json.loads(raw)

    def test_markdown_fence_and_preamble(self):
        raw = (
            "Here are the extracted claims:\n```json\n"
            '[{"claim": "Water boils at 100 degrees Celsius.", "type": "scientific"}]\n```'
        )
        out = json.loads(extract_array(raw))
        assert out[0]["claim"] == "Water boils at 100 degrees Celsius."

    def test_array_inside_prose(self):
        raw = 'Sure! [{"claim": "Paris is the capital of France."}] Hope that helps.'
        assert json.loads(extract_array(raw)) == [{"claim": "Paris is the capital of France."}]

    def test_nested_values_survive(self):
        raw = '[{"claim": "Mars has two moons.", "tags": ["astro"]}, {"claim": "Venus is hot."}]'
        assert len(json.loads(extract_array(raw))) == 2

    def test_bare_object_is_wrapped(self):
        raw = 'Output: {"claim": "The Moon orbits the Earth.", "type": "scientific"}'
        out = json.loads(extract_array(raw))
        assert isinstance(out, list)
        assert out[0]["claim"] == "The Moon orbits the Earth."

    def test_broken_json_falls_back_to_empty(self):
        assert extract_array('[{"claim": "unterminated') == EMPTY_ARRAY

    @pytest.mark.parametrize("raw", ["", None, "no json here at all", 42])
    def test_nothing_recoverable(self, raw):
        assert extract_array(raw) == EMPTY_ARRAY

    @pytest.mark.parametrize(
        "raw",
        [
            '```json\n[{"claim": "Rome was founded in 753 BC."}]\n```',
            'JSON: {"claim": "The Nile is the longest river in Africa."}',
            "nothing useful",
            '["just", "strings"]',
        ],
    )
    def test_idempotent(self, raw):
        once = extract_array(raw)
        assert extract_array(once) == once


class TestExtractObject:
    def test_prose_prefix(self):
        raw = 'Here is my evaluation in JSON format: {"assessment": "true", "confidence": 90}'
        assert json.loads(extract_object(raw))["assessment"] == "true"

    def test_object_with_nested_array(self):
        raw = (
            "Result:\n"
            '{"assessment": "partially_true", "confidence": 60, '
            '"summary": "Mixed.", "supporting_sources": [1, 2]}\nThanks.'
        )
        out = json.loads(extract_object(raw))
        assert out["supporting_sources"] == [1, 2]

    def test_skips_objects_without_required_key(self):
        raw = '{"note": "ignore me"} then {"assessment": "false", "confidence": 80}'
        assert json.loads(extract_object(raw))["assessment"] == "false"

    def test_missing_key_gives_empty(self):
        assert extract_object('{"verdict": "supported"}') == EMPTY_OBJECT

    def test_custom_key(self):
        assert json.loads(extract_object('{"claim": "x"}', required_key="claim")) == {"claim": "x"}


class TestParseResults:
    def test_parse_array_ok(self):
        result = parse_array('[{"claim": "Light travels fast."}]')
        assert isinstance(result, ParseOk)
        assert result.value[0]["claim"] == "Light travels fast."

    def test_parse_array_empty(self):
        assert isinstance(parse_array("I could not find any claims."), ParseEmpty)

    def test_parse_object_ok(self):
        result = parse_object('{"assessment": "true"}')
        assert isinstance(result, ParseOk)

    def test_parse_object_empty(self):
        assert isinstance(parse_object("The claim is true."), ParseEmpty)
