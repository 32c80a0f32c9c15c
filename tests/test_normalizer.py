import pytest

from core.recovery.normalizer import normalize_response

PAYLOADS = [
    '{"content": "x"}',
    '{\n  "days": [\n    {"day": 1}\n  ]\n}',
    "[1, 2, 3]",
]


@pytest.mark.parametrize("payload", PAYLOADS)
@pytest.mark.parametrize("opening", ["```json\n", "```\n", "```JSON\n", "```json "])
def test_fenced_payload_is_identical_to_unfenced(payload, opening):
    assert normalize_response(f"{opening}{payload}\n```") == payload


def test_text_without_fences_is_only_trimmed():
    assert normalize_response('   {"a": 1}\n\n') == '{"a": 1}'


def test_missing_trailing_fence():
    assert normalize_response('```json\n{"a": 1}') == '{"a": 1}'


def test_none_and_empty():
    assert normalize_response(None) == ""
    assert normalize_response("   ") == ""


def test_inner_fences_are_kept():
    body = '{"content": "Use ```python\\nprint(1)\\n``` here"}'
    assert normalize_response(f"```json\n{body}\n```") == body
