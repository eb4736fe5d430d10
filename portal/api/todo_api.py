from typing import List

from fastapi import APIRouter, Depends, Response

from portal.api.deps import get_storage
from portal.auth.gate import GatedRoute, Operation, require
from portal.models import EntityKind, Todo
from portal.models.todo import TodoUpdate
from portal.schemas.todo_schema import TodoRequest
from portal.services import todo_service
from portal.services.storage import Storage

router = APIRouter(prefix="/api/todos", tags=["todos"], route_class=GatedRoute)


@router.get("", response_model=List[Todo])
def list_todos(
    current_user=Depends(require(EntityKind.todos, Operation.list)),
    storage: Storage = Depends(get_storage),
):
    return todo_service.list_todos(storage, current_user)


@router.post("", response_model=Todo, status_code=201)
def create_todo(
    todo: TodoRequest,
    current_user=Depends(require(EntityKind.todos, Operation.create)),
    storage: Storage = Depends(get_storage),
):
    return todo_service.create_todo(storage, current_user, todo)


@router.put("/{todo_id}", response_model=Todo)
def update_todo(
    todo_id: int,
    update: TodoUpdate,
    current_user=Depends(require(EntityKind.todos, Operation.update)),
    storage: Storage = Depends(get_storage),
):
    return todo_service.update_todo(storage, current_user, todo_id, update)


@router.delete("/{todo_id}", status_code=204)
def delete_todo(
    todo_id: int,
    current_user=Depends(require(EntityKind.todos, Operation.delete)),
    storage: Storage = Depends(get_storage),
):
    todo_service.delete_todo(storage, current_user, todo_id)
    return Response(status_code=204)
