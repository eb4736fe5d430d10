from typing import List

from portal.auth.gate import check_owner
from portal.models import EntityKind, Todo
from portal.models.todo import TodoCreate, TodoUpdate
from portal.schemas.todo_schema import TodoRequest
from portal.schemas.user_schema import UserResponse
from portal.services.entity_service import get_or_404, update_or_404
from portal.services.storage import Storage
from portal.utils.utils import utcnow


def list_todos(storage: Storage, identity: UserResponse) -> List[Todo]:
    return storage.list(EntityKind.todos, user_id=identity.id)


def create_todo(storage: Storage, identity: UserResponse, request: TodoRequest) -> Todo:
    return storage.create(EntityKind.todos, TodoCreate(
        user_id=identity.id,
        text=request.text,
        completed=request.completed,
        created_at=utcnow(),
    ))


def _owned_todo(storage: Storage, identity: UserResponse, todo_id: int) -> Todo:
    todo = get_or_404(storage, EntityKind.todos, todo_id, "Todo")
    check_owner(identity, todo.user_id, EntityKind.todos)
    return todo


def update_todo(storage: Storage, identity: UserResponse, todo_id: int, update: TodoUpdate) -> Todo:
    _owned_todo(storage, identity, todo_id)
    return update_or_404(storage, EntityKind.todos, todo_id, update, "Todo")


def delete_todo(storage: Storage, identity: UserResponse, todo_id: int) -> None:
    _owned_todo(storage, identity, todo_id)
    storage.delete(EntityKind.todos, todo_id)
