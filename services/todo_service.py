"""
Todo Service
The five todo handlers. Each performs one read or write against the `todos`
table through the Flask-SQLAlchemy session and returns plain dicts ready for
JSON serialization.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError

from models import db, Todo
from models.todo import MAX_TODO_ID
from services.todo_errors import TodoNotFoundError
from services.todo_inputs import (
    CreateTodoInput, UpdateTodoInput, ToggleTodoInput, DeleteTodoInput
)

logger = logging.getLogger(__name__)


def _get_or_raise(todo_id: int) -> Todo:
    # Ids past the column range can never exist
    todo = db.session.get(Todo, todo_id) if todo_id <= MAX_TODO_ID else None
    if todo is None:
        logger.warning(f"Todo {todo_id} not found")
        raise TodoNotFoundError(todo_id)
    return todo


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Todo write failed: {e}")
        raise


def get_todos() -> List[Dict[str, Any]]:
    """Return every todo, newest first (ties broken by id, newest first)."""
    stmt = select(Todo).order_by(Todo.created_at.desc(), Todo.id.desc())
    todos = db.session.execute(stmt).scalars().all()
    return [todo.to_dict() for todo in todos]


def create_todo(data: CreateTodoInput) -> Dict[str, Any]:
    """Insert a new, not yet completed todo and return the persisted row."""
    todo = Todo(title=data.title, completed=False)
    db.session.add(todo)
    _commit()
    logger.info(f"Created todo {todo.id}")
    return todo.to_dict()


def update_todo(data: UpdateTodoInput) -> Dict[str, Any]:
    """
    Apply a partial update. Only `title` is updatable here; `completed` goes
    through toggle_todo and `created_at` never changes.
    """
    todo = _get_or_raise(data.id)
    if data.title is not None:
        todo.title = data.title
    _commit()
    logger.info(f"Updated todo {todo.id}")
    return todo.to_dict()


def toggle_todo(data: ToggleTodoInput) -> Dict[str, Any]:
    """Flip `completed`. Read-then-write, so concurrent toggles are last-writer-wins."""
    todo = _get_or_raise(data.id)
    todo.toggle()
    _commit()
    logger.info(f"Toggled todo {todo.id} -> completed={todo.completed}")
    return todo.to_dict()


def delete_todo(data: DeleteTodoInput) -> Dict[str, Any]:
    """Hard delete by id. Missing ids are not an error."""
    if data.id > MAX_TODO_ID:
        logger.info(f"Delete of todo {data.id} matched no rows")
        return {'success': True}
    result = db.session.execute(delete(Todo).where(Todo.id == data.id))
    _commit()
    if result.rowcount:
        logger.info(f"Deleted todo {data.id}")
    else:
        logger.info(f"Delete of todo {data.id} matched no rows")
    return {'success': True}
