"""
Todo RPC Client
Thin requests-based transport for the /api/rpc procedures.

Structured server failures and network failures both surface as RpcError so
callers handle a single exception type.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class RpcError(Exception):
    """A remote procedure call did not return a successful result."""

    def __init__(self, code: str, message: str, status_code: Optional[int] = None,
                 issues: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.issues = issues or []

    def __repr__(self):
        return f'<RpcError {self.code}: {self.message}>'


def parse_todo(data: Dict[str, Any]) -> Dict[str, Any]:
    """Decode a wire todo, turning `created_at` back into a datetime."""
    todo = dict(data)
    if isinstance(todo.get('created_at'), str):
        todo['created_at'] = datetime.fromisoformat(todo['created_at'])
    return todo


class TodoRpcClient:
    """
    Calls the todo procedures on a running server.

    Example:
        client = TodoRpcClient("http://localhost:5000")
        todo = client.create_todo("Buy milk")
        client.toggle_todo(todo["id"])
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT, prefix: str = "/api/rpc"):
        self.base_url = base_url.rstrip('/')
        self.prefix = prefix
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, procedure: str) -> str:
        return f"{self.base_url}{self.prefix}/{procedure}"

    def _handle(self, procedure: str, response: requests.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            raise RpcError('TRANSPORT_ERROR',
                           f"{procedure}: non-JSON response (HTTP {response.status_code})",
                           response.status_code)

        if body.get('success'):
            return body.get('result')

        error = body.get('error') or {}
        raise RpcError(
            error.get('code', 'INTERNAL_SERVER_ERROR'),
            error.get('message', f"{procedure} failed"),
            response.status_code,
            error.get('issues'),
        )

    def query(self, procedure: str, payload: Any = None) -> Any:
        params = {'input': json.dumps(payload)} if payload is not None else None
        try:
            response = self.session.get(self._url(procedure), params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"{procedure} transport failure: {e}")
            raise RpcError('TRANSPORT_ERROR', str(e))
        return self._handle(procedure, response)

    def mutate(self, procedure: str, payload: Any) -> Any:
        try:
            response = self.session.post(self._url(procedure), json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"{procedure} transport failure: {e}")
            raise RpcError('TRANSPORT_ERROR', str(e))
        return self._handle(procedure, response)

    # Procedures

    def get_todos(self) -> List[Dict[str, Any]]:
        return [parse_todo(t) for t in self.query('getTodos')]

    def create_todo(self, title: str) -> Dict[str, Any]:
        return parse_todo(self.mutate('createTodo', {'title': title}))

    def update_todo(self, todo_id: int, title: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'id': todo_id}
        if title is not None:
            payload['title'] = title
        return parse_todo(self.mutate('updateTodo', payload))

    def toggle_todo(self, todo_id: int) -> Dict[str, Any]:
        return parse_todo(self.mutate('toggleTodo', {'id': todo_id}))

    def delete_todo(self, todo_id: int) -> Dict[str, Any]:
        return self.mutate('deleteTodo', {'id': todo_id})
