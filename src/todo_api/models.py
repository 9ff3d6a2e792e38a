from __future__ import annotations

from typing import TypedDict


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    Storage-side representation of a Todo item.

    Fields:
    - id: Unsigned integer identifier; 0 means "not yet assigned"
    - title: Short text label
    - description: Free text
    - done: Boolean completion flag
    """

    id: int
    title: str
    description: str
    done: bool


def new_entity(title: str, description: str = "", done: bool = False, todo_id: int = 0) -> TodoEntity:
    """Build a TodoEntity; storage assigns the id on insert when it is 0."""
    return {"id": todo_id, "title": title, "description": description, "done": done}
