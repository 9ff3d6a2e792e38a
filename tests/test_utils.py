import pytest

from todo_api.errors import ParseError
from todo_api.utils import MAX_TODO_ID, parse_todo_id


@pytest.mark.parametrize("raw,expected", [("0", 0), ("1", 1), ("007", 7), (str(MAX_TODO_ID), MAX_TODO_ID)])
def test_parse_valid(raw, expected):
    assert parse_todo_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "-1", "+1", " 1", "1 ", "1_000", "1.0", "١", str(MAX_TODO_ID + 1)])
def test_parse_invalid(raw):
    with pytest.raises(ParseError) as exc:
        parse_todo_id(raw)
    assert exc.value.status_code == 400
    assert exc.value.kind == "ParseError"
