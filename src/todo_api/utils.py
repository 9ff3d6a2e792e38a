from __future__ import annotations

from .errors import ParseError

MAX_TODO_ID = 2**64 - 1


# PUBLIC_INTERFACE
def parse_todo_id(raw: str) -> int:
    """
    Parse a path id as a base-10 unsigned 64-bit integer.

    Only ASCII digits are accepted; signs, whitespace, underscores and
    non-ASCII digits are rejected with ParseError.
    """
    if not raw or not raw.isascii() or not raw.isdigit():
        raise ParseError(f"invalid todo id {raw!r}: expected an unsigned integer")
    value = int(raw, 10)
    if value > MAX_TODO_ID:
        raise ParseError(f"invalid todo id {raw!r}: out of range")
    return value
