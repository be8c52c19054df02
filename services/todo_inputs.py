"""
Input contracts for the todo procedures.

Each contract is a frozen dataclass built from a decoded JSON payload with
`from_payload`. Unknown keys are ignored; every problem found is reported in
a single TodoValidationError.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from models.todo import TITLE_MAX_LENGTH
from services.todo_errors import TodoValidationError


def _require_object(payload: Any) -> Dict[str, Any]:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise TodoValidationError(
            "Input must be a JSON object",
            issues=[{'field': '', 'message': 'Expected object'}]
        )
    return payload


def _check_id(payload: Dict[str, Any], issues: List[Dict[str, str]]) -> Optional[int]:
    if 'id' not in payload or payload['id'] is None:
        issues.append({'field': 'id', 'message': 'Required'})
        return None
    value = payload['id']
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        issues.append({'field': 'id', 'message': 'Expected integer'})
        return None
    if value < 1:
        issues.append({'field': 'id', 'message': 'Must be a positive integer'})
        return None
    return value


def _check_title(value: Any, issues: List[Dict[str, str]]) -> Optional[str]:
    if not isinstance(value, str):
        issues.append({'field': 'title', 'message': 'Expected string'})
        return None
    title = value.strip()
    if not title:
        issues.append({'field': 'title', 'message': 'Title is required'})
        return None
    if len(title) > TITLE_MAX_LENGTH:
        issues.append({'field': 'title', 'message': f'Title must be at most {TITLE_MAX_LENGTH} characters'})
        return None
    return title


def _raise_if_invalid(issues: List[Dict[str, str]]):
    if issues:
        summary = "; ".join(f"{i['field']}: {i['message']}" for i in issues)
        raise TodoValidationError(f"Invalid input ({summary})", issues=issues)


@dataclass(frozen=True)
class CreateTodoInput:
    title: str

    @classmethod
    def from_payload(cls, payload: Any) -> "CreateTodoInput":
        payload = _require_object(payload)
        issues: List[Dict[str, str]] = []
        if 'title' not in payload or payload['title'] is None:
            issues.append({'field': 'title', 'message': 'Title is required'})
            title = None
        else:
            title = _check_title(payload['title'], issues)
        _raise_if_invalid(issues)
        return cls(title=title)


@dataclass(frozen=True)
class UpdateTodoInput:
    """Partial update: only fields that are not None are applied."""
    id: int
    title: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "UpdateTodoInput":
        payload = _require_object(payload)
        issues: List[Dict[str, str]] = []
        todo_id = _check_id(payload, issues)
        title = None
        if payload.get('title') is not None:
            title = _check_title(payload['title'], issues)
        _raise_if_invalid(issues)
        return cls(id=todo_id, title=title)


@dataclass(frozen=True)
class ToggleTodoInput:
    id: int

    @classmethod
    def from_payload(cls, payload: Any) -> "ToggleTodoInput":
        payload = _require_object(payload)
        issues: List[Dict[str, str]] = []
        todo_id = _check_id(payload, issues)
        _raise_if_invalid(issues)
        return cls(id=todo_id)


@dataclass(frozen=True)
class DeleteTodoInput:
    id: int

    @classmethod
    def from_payload(cls, payload: Any) -> "DeleteTodoInput":
        payload = _require_object(payload)
        issues: List[Dict[str, str]] = []
        todo_id = _check_id(payload, issues)
        _raise_if_invalid(issues)
        return cls(id=todo_id)
