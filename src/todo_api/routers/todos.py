from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Type, TypeVar

from fastapi import APIRouter, Depends, Path, Request
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError

from ..errors import DecodeError
from ..models import new_entity
from ..schemas import ErrorOut, TodoCreate, TodoOut, TodoUpdate
from ..storage import Storage
from ..utils import parse_todo_id

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/todo",
    tags=["todos"],
)

_bad_request = {400: {"model": ErrorOut, "description": "Malformed id or request body"}}
_not_found = {404: {"model": ErrorOut, "description": "Todo not found"}}


def get_storage(request: Request) -> Storage:
    """
    Dependency returning the storage injected into the application state.
    """
    return request.app.state.storage


def todo_id_param(
    todo_id: str = Path(..., description="Unsigned integer id of the todo item"),
) -> int:
    """
    Dependency parsing the {todo_id} path segment; raises ParseError when malformed.
    """
    return parse_todo_id(todo_id)


ModelT = TypeVar("ModelT", bound=BaseModel)


def json_body(model: Type[ModelT]) -> Callable[..., Any]:
    """
    Build a dependency decoding the raw request body as JSON into `model`,
    whatever the Content-Type header says. Failures raise DecodeError.
    """

    async def _decode(request: Request) -> ModelT:
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            raise DecodeError("Request body could not be decoded", detail=jsonable_encoder(e.errors())) from e

    return _decode


def _body_schema(model: Type[BaseModel]) -> Dict[str, Any]:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TodoOut],
    summary="List Todos",
    description="Return every Todo item. An empty store yields an empty array.",
)
def list_todos(storage: Storage = Depends(get_storage)) -> List[TodoOut]:
    return [TodoOut(**t) for t in storage.get_all()]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoOut,
    summary="Create Todo",
    description="Create a new, incomplete Todo item and return it with its assigned id.",
    responses=_bad_request,
    openapi_extra=_body_schema(TodoCreate),
)
def create_todo(
    payload: TodoCreate = Depends(json_body(TodoCreate)),
    storage: Storage = Depends(get_storage),
) -> TodoOut:
    """
    Create a new Todo.
    """
    todo = new_entity(title=payload.title, description=payload.description)
    storage.insert(todo)
    logger.info("Created todo %s", todo["id"])
    return TodoOut(**todo)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={**_bad_request, **_not_found},
)
def get_todo(todo_id: int = Depends(todo_id_param), storage: Storage = Depends(get_storage)) -> TodoOut:
    """
    Retrieve a single Todo item by its ID.
    """
    return TodoOut(**storage.get(todo_id))


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Replace Todo",
    description="Replace title, description and done of an existing Todo item.",
    responses={**_bad_request, **_not_found},
    openapi_extra=_body_schema(TodoUpdate),
)
def put_todo(
    todo_id: int = Depends(todo_id_param),
    payload: TodoUpdate = Depends(json_body(TodoUpdate)),
    storage: Storage = Depends(get_storage),
) -> TodoOut:
    """
    Full update (replace) of the mutable fields of a Todo item.
    """
    todo = new_entity(
        title=payload.title,
        description=payload.description,
        done=payload.done,
        todo_id=todo_id,
    )
    updated = storage.update(todo, todo_id)
    logger.info("Updated todo %s", todo_id)
    return TodoOut(**updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=TodoOut,
    summary="Delete Todo",
    description="Delete a Todo item by ID and return the removed item.",
    responses={**_bad_request, **_not_found},
)
def delete_todo(todo_id: int = Depends(todo_id_param), storage: Storage = Depends(get_storage)) -> TodoOut:
    """
    Delete a Todo. Returns the deleted item on success, 404 if not found.
    """
    removed = storage.delete(todo_id)
    logger.info("Deleted todo %s", todo_id)
    return TodoOut(**removed)
