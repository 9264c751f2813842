import pytest

from errors import ParseError
from parsing import extract_json_candidate, parse_model_json


class TestExtractCandidate:
    def test_bare_object(self):
        assert extract_json_candidate('{"a": 1}') == '{"a": 1}'

    def test_object_wrapped_in_prose(self):
        text = 'Sure! Here you go: {"a": 1} Let me know if you need more.'
        assert extract_json_candidate(text) == '{"a": 1}'

    def test_brace_span_is_greedy(self):
        text = 'first {"a": 1} then {"b": 2}'
        assert extract_json_candidate(text) == '{"a": 1} then {"b": 2}'

    def test_fenced_block_without_braces(self):
        text = "```json\n[1, 2, 3]\n```"
        assert extract_json_candidate(text) == "[1, 2, 3]"

    def test_reasoning_block_is_dropped(self):
        text = '<think>maybe {"draft": true}</think>\n{"final": true}'
        assert extract_json_candidate(text) == '{"final": true}'

    @pytest.mark.parametrize("text", ["", "no json here", "``````"])
    def test_nothing_found(self, text):
        assert extract_json_candidate(text) is None


class TestParseModelJson:
    def test_fenced_and_plain_parse_identically(self):
        body = '{"plantName": "Basil", "confidence": 90}'
        assert parse_model_json(f"```json\n{body}\n```") == parse_model_json(body)

    def test_trailing_commas_are_repaired(self):
        assert parse_model_json('{"a": [1, 2,], "b": "x",}') == {"a": [1, 2], "b": "x"}

    def test_smart_quotes_are_repaired(self):
        assert parse_model_json("{“plantName”: “Basil”}") == {"plantName": "Basil"}

    def test_no_candidate_raises_invalid_format(self):
        with pytest.raises(ParseError) as excinfo:
            parse_model_json("The plant looks healthy.")
        assert excinfo.value.message == "Failed to parse AI response - invalid format"
        assert excinfo.value.detail == "The plant looks healthy."

    def test_malformed_json_raises_parse_error(self):
        with pytest.raises(ParseError) as excinfo:
            parse_model_json('{"plantName": Basil}')
        assert excinfo.value.message == "Failed to parse AI response as JSON"

    def test_non_object_json_raises_parse_error(self):
        with pytest.raises(ParseError):
            parse_model_json("```\n[1, 2]\n```")

    def test_deeply_nested_json_raises_parse_error(self):
        nested = '{"a": ' + "[" * 100000 + "]" * 100000 + "}"
        with pytest.raises(ParseError) as excinfo:
            parse_model_json(nested)
        assert excinfo.value.message == "Failed to parse AI response as JSON"
