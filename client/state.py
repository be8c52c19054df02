"""
Client-side todo state.

Holds the session's in-memory todo list and keeps it in step with the
server through TodoRpcClient. When a call fails the same mutation is applied
locally and the state switches to degraded mode; nothing done in degraded
mode is ever sent to the server. `load()` is the only way back online and
replaces local state with the server's list.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from client.rpc import RpcError, TodoRpcClient

logger = logging.getLogger(__name__)

OFFLINE_BANNER = "Unable to connect to server. Using offline mode."
SAVED_LOCALLY_BANNER = "Server unavailable - changes saved locally"

OFFLINE_DEMO_TITLES = [
    "🔧 Server connection failed - running in demo mode",
    "✨ You can still add, edit, and delete tasks locally",
    "🎯 Try out all the features below!",
]


class TodoState:
    """In-memory todo list with remote-first, local-fallback mutations."""

    def __init__(self, rpc: TodoRpcClient):
        self.rpc = rpc
        self.todos: List[Dict[str, Any]] = []
        self.banner: Optional[str] = None
        self.last_error: Optional[RpcError] = None

    @property
    def degraded(self) -> bool:
        return self.banner is not None

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.todos if t['completed'])

    @property
    def total_count(self) -> int:
        return len(self.todos)

    @property
    def remaining_count(self) -> int:
        return self.total_count - self.completed_count

    @property
    def progress_percent(self) -> int:
        if not self.todos:
            return 0
        # Half rounds up, matching the browser client's Math.round
        return int(self.completed_count * 100 / self.total_count + 0.5)

    def find(self, todo_id: int) -> Optional[Dict[str, Any]]:
        for todo in self.todos:
            if todo['id'] == todo_id:
                return todo
        return None

    def _next_local_id(self) -> int:
        return max((t['id'] for t in self.todos), default=0) + 1

    def _replace(self, updated: Dict[str, Any]):
        self.todos = [updated if t['id'] == updated['id'] else t for t in self.todos]

    def _fail(self, error: RpcError, action: str):
        logger.error(f"Failed to {action}: {error.message}")
        self.last_error = error
        self.banner = SAVED_LOCALLY_BANNER

    def load(self):
        """Fetch the list from the server; fall back to demo data when unreachable."""
        try:
            self.todos = self.rpc.get_todos()
            self.banner = None
            self.last_error = None
        except RpcError as e:
            logger.error(f"Failed to load todos: {e.message}")
            self.last_error = e
            self.banner = OFFLINE_BANNER
            now = datetime.now(timezone.utc)
            self.todos = [
                {'id': i, 'title': title, 'completed': False, 'created_at': now}
                for i, title in enumerate(OFFLINE_DEMO_TITLES, start=1)
            ]

    def create(self, title: str) -> Optional[Dict[str, Any]]:
        title = title.strip()
        if not title:
            return None

        if not self.degraded:
            try:
                todo = self.rpc.create_todo(title)
                self.todos.insert(0, todo)
                return todo
            except RpcError as e:
                self._fail(e, "create todo")

        todo = {
            'id': self._next_local_id(),
            'title': title,
            'completed': False,
            'created_at': datetime.now(timezone.utc),
        }
        self.todos.insert(0, todo)
        return todo

    def toggle(self, todo_id: int) -> Optional[Dict[str, Any]]:
        current = self.find(todo_id)
        if current is None:
            return None

        if not self.degraded:
            try:
                updated = self.rpc.toggle_todo(todo_id)
                self._replace(updated)
                return updated
            except RpcError as e:
                self._fail(e, "toggle todo")

        updated = dict(current, completed=not current['completed'])
        self._replace(updated)
        return updated

    def update(self, todo_id: int, title: str) -> Optional[Dict[str, Any]]:
        title = title.strip()
        current = self.find(todo_id)
        if not title or current is None:
            return None

        if not self.degraded:
            try:
                updated = self.rpc.update_todo(todo_id, title)
                self._replace(updated)
                return updated
            except RpcError as e:
                self._fail(e, "update todo")

        updated = dict(current, title=title)
        self._replace(updated)
        return updated

    def delete(self, todo_id: int):
        """Remove the todo locally whatever the server says."""
        if not self.degraded:
            try:
                self.rpc.delete_todo(todo_id)
            except RpcError as e:
                self._fail(e, "delete todo")
        self.todos = [t for t in self.todos if t['id'] != todo_id]
