"""
Todo Error Taxonomy

Typed failures raised by the todo handlers and turned into structured
responses by the RPC router. Storage errors are not wrapped here; they
propagate unchanged.
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DATABASE = "database"
    UNKNOWN = "unknown"


class TodoError(Exception):
    """Base exception for todo operations."""
    status_code = 500
    code = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code,
            'message': self.message,
            'category': self.category.value,
        }


class TodoValidationError(TodoError):
    """Input did not match the procedure's contract."""
    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str, issues: Optional[List[Dict[str, str]]] = None):
        super().__init__(message, category=ErrorCategory.VALIDATION)
        self.issues = issues or []

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['issues'] = self.issues
        return data


class TodoNotFoundError(TodoError):
    """Operation targeted an id with no matching row."""
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, todo_id: int):
        super().__init__(
            f"Todo {todo_id} not found",
            category=ErrorCategory.NOT_FOUND,
            context={'todo_id': todo_id}
        )
        self.todo_id = todo_id
