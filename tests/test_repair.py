import json

import pytest

from core.recovery.repair import escape_json_text, is_strict_json, repair_json_text


def test_valid_json_is_returned_unchanged():
    text = '{"content": "x", "keyPoints": ["a", "b"]}'
    assert repair_json_text(text) == text


def test_escape_order_does_not_double_escape():
    assert escape_json_text('a\\b"c\n') == 'a\\\\b\\"c\\n'
    assert escape_json_text("tab\there") == "tab\\there"


def test_backtick_content_becomes_json_string():
    repaired = repair_json_text('{"content": `line1\nline2`}')
    assert repaired == '{"content": "line1\\nline2"}'
    assert json.loads(repaired)["content"] == "line1\nline2"


def test_backticks_on_other_fields():
    repaired = repair_json_text('{"answer": `say "hi"`, "relatedConcepts": []}')
    data = json.loads(repaired)
    assert data["answer"] == 'say "hi"'
    assert data["relatedConcepts"] == []


def test_raw_newlines_in_free_text_are_escaped():
    repaired = repair_json_text('{"content": "line1\nline2", "examples": []}')
    assert json.loads(repaired)["content"] == "line1\nline2"


def test_already_escaped_free_text_is_left_alone():
    text = '{"content": "a\\nb\tc"}'
    assert repair_json_text(text) == text
    assert not is_strict_json(text)


def test_list_markers_are_stripped_from_content():
    repaired = repair_json_text('{"content": "Intro\n- first\n* second", "keyPoints": []}')
    assert json.loads(repaired)["content"] == "Intro\nfirst\nsecond"


def test_bold_markers_are_not_list_markers():
    repaired = repair_json_text('{"content": "Intro\n**bold** text", "keyPoints": []}')
    assert json.loads(repaired)["content"] == "Intro\n**bold** text"


def test_truncated_array_is_cut_at_last_complete_pair():
    repaired = repair_json_text('{"content": "Intro", "keyPoints": ["a", "b", "c')
    assert repaired == '{"content": "Intro"}'
    assert json.loads(repaired) == {"content": "Intro"}


def test_truncated_nested_structure_is_closed():
    text = (
        '{"days": [{"day": 1, "title": "Basics", "subtopics": ["a", "b"], '
        '"explanations": ["x", "y'
    )
    data = json.loads(repair_json_text(text))
    assert data == {"days": [{"day": 1, "title": "Basics", "subtopics": ["a", "b"]}]}


def test_truncation_without_any_complete_value():
    assert repair_json_text('{"content": "unterminated') == "{}"


def test_prose_is_not_invented_into_json():
    assert repair_json_text("Sure, here you go") == "Sure, here you go"


FIXTURES = [
    '{"content": "x"}',
    '{"content": `line1\nline2`}',
    '{"answer": `say "hi"`, "relatedConcepts": []}',
    '{"content": "line1\nline2", "examples": []}',
    '{"content": "a\\nb\tc"}',
    '{"content": "Intro\n- first\n* second", "keyPoints": []}',
    '{"content": "Intro", "keyPoints": ["a", "b", "c',
    '{"days": [{"day": 1, "title": "Basics", "subtopics": ["a"',
    "{'content': 'single quotes'}",
    "Sure, here you go",
    "",
]


@pytest.mark.parametrize("text", FIXTURES)
def test_repair_is_idempotent(text):
    once = repair_json_text(text)
    assert repair_json_text(once) == once
