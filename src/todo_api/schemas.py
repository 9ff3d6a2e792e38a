from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Payload for creating a new Todo item. New items always start incomplete.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy milk",
                "description": "Two litres, semi-skimmed",
            }
        }
    )

    title: StrictStr = Field(..., description="Short title for the todo item")
    description: StrictStr = Field(default="", description="Free text description")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Payload for updating an existing Todo item.
    All mutable fields are replaced; omitted fields take their defaults.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy milk",
                "description": "Two litres, semi-skimmed",
                "done": True,
            }
        }
    )

    title: StrictStr = Field(..., description="Short title for the todo item")
    description: StrictStr = Field(default="", description="Free text description")
    done: StrictBool = Field(default=False, description="Completion status flag")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy milk",
                "description": "Two litres, semi-skimmed",
                "done": False,
            }
        }
    )

    id: int = Field(..., ge=0, description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    description: str = Field(default="", description="Free text description")
    done: bool = Field(..., description="Completion status flag")


class ErrorOut(BaseModel):
    """Uniform error body returned for every failed request."""

    error: str = Field(..., description="Error kind, e.g. NotFound or DecodeError")
    message: str = Field(..., description="Human readable error message")
    detail: Optional[List[Any]] = Field(default=None, description="Validation details, when available")
