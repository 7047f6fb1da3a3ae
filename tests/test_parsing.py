import pytest

from readshelf.processors.ai.parsing import parse_json_object


def test_plain_json_object():
    assert parse_json_object('{"title": "A", "summary": "B"}') == {"title": "A", "summary": "B"}


def test_code_fenced_json_with_chatter():
    raw = 'Here you go:\n```json\n{"relevanceScore": 0.4, "reasoning": "meh"}\n```\nThanks!'
    assert parse_json_object(raw) == {"relevanceScore": 0.4, "reasoning": "meh"}


@pytest.mark.parametrize("raw", ["", "   ", "no json here", "[1, 2, 3]"])
def test_unparseable_replies_raise(raw):
    with pytest.raises(ValueError):
        parse_json_object(raw)


def test_broken_json_raises_value_error():
    with pytest.raises(ValueError):
        parse_json_object('{"title": "A",, }')
