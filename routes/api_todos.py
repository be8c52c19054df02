"""
Todo RPC Routes
Exposes the todo handlers as named remote procedures under /api/rpc.

Queries are called with GET (input, if any, as a JSON-encoded `input` query
parameter); mutations are called with POST and a JSON body. Every response
uses the same envelope:

    {"success": true, "result": ...}
    {"success": false, "error": {"code": ..., "message": ...}}
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError

from models import db
from services import todo_service
from services.todo_errors import TodoError, TodoValidationError, ErrorCategory
from services.todo_inputs import (
    CreateTodoInput, UpdateTodoInput, ToggleTodoInput, DeleteTodoInput
)
from utils.etag_helper import with_etag

logger = logging.getLogger(__name__)

api_todos_bp = Blueprint('api_todos', __name__, url_prefix='/api/rpc')

QUERY = 'query'
MUTATION = 'mutation'


@dataclass(frozen=True)
class Procedure:
    name: str
    kind: str
    handler: Callable[..., Any]
    input_type: Optional[type] = None

    @property
    def http_method(self) -> str:
        return 'GET' if self.kind == QUERY else 'POST'


PROCEDURES: Dict[str, Procedure] = {
    p.name: p for p in (
        Procedure('getTodos', QUERY, todo_service.get_todos),
        Procedure('createTodo', MUTATION, todo_service.create_todo, CreateTodoInput),
        Procedure('updateTodo', MUTATION, todo_service.update_todo, UpdateTodoInput),
        Procedure('toggleTodo', MUTATION, todo_service.toggle_todo, ToggleTodoInput),
        Procedure('deleteTodo', MUTATION, todo_service.delete_todo, DeleteTodoInput),
    )
}


def _error_response(code: str, message: str, status: int, **extra):
    error = {'code': code, 'message': message}
    error.update(extra)
    return jsonify({'success': False, 'error': error}), status


def _read_input() -> Any:
    """Decode the raw procedure input for the current request."""
    if request.method == 'GET':
        raw = request.args.get('input')
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            raise TodoValidationError("Query parameter 'input' is not valid JSON")

    if not request.get_data():
        return None
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        raise TodoValidationError("Request body is not valid JSON")
    return payload


def _invoke(proc: Procedure):
    try:
        if proc.input_type is None:
            result = proc.handler()
        else:
            result = proc.handler(proc.input_type.from_payload(_read_input()))
        return jsonify({'success': True, 'result': result})

    except TodoError as e:
        data = e.to_dict()
        return _error_response(data.pop('code'), data.pop('message'), e.status_code, **data)

    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Procedure {proc.name} failed in storage: {e}")
        return _error_response('INTERNAL_SERVER_ERROR', str(e), 500,
                               category=ErrorCategory.DATABASE.value)

    except Exception as e:
        db.session.rollback()
        logger.exception(f"Procedure {proc.name} failed")
        return _error_response('INTERNAL_SERVER_ERROR', str(e), 500,
                               category=ErrorCategory.UNKNOWN.value)


@with_etag
def _invoke_query(proc: Procedure):
    return _invoke(proc)


@api_todos_bp.route('/<procedure>', methods=['GET', 'POST'])
def call_procedure(procedure):
    """Dispatch a remote procedure call by name."""
    proc = PROCEDURES.get(procedure)
    if proc is None:
        return _error_response('PROCEDURE_NOT_FOUND', f"No procedure named '{procedure}'", 404)

    if request.method != proc.http_method:
        return _error_response(
            'METHOD_NOT_SUPPORTED',
            f"'{procedure}' is a {proc.kind}; call it with {proc.http_method}",
            405
        )

    if proc.kind == QUERY:
        return _invoke_query(proc)
    return _invoke(proc)
