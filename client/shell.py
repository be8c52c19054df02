"""
Interactive terminal client.

    $ python -m client.shell --url http://localhost:5000
"""

import argparse
import cmd
import logging
import os

from client.render import render_todos
from client.rpc import TodoRpcClient
from client.state import TodoState


class TodoShell(cmd.Cmd):
    intro = "Type help or ? to list commands."
    prompt = "todo> "

    def __init__(self, state: TodoState, **kwargs):
        super().__init__(**kwargs)
        self.state = state

    def _show(self):
        self.stdout.write(render_todos(self.state) + "\n")

    def _parse_id(self, arg: str):
        try:
            return int(arg.split()[0])
        except (IndexError, ValueError):
            self.stdout.write("Expected a todo id\n")
            return None

    def preloop(self):
        self.state.load()
        self._show()

    def do_list(self, arg):
        """list: show all todos"""
        self._show()

    def do_reload(self, arg):
        """reload: fetch the list from the server again"""
        self.state.load()
        self._show()

    def do_add(self, arg):
        """add TITLE: create a todo"""
        if self.state.create(arg) is None:
            self.stdout.write("Title is required\n")
            return
        self._show()

    def do_toggle(self, arg):
        """toggle ID: mark a todo done / not done"""
        todo_id = self._parse_id(arg)
        if todo_id is None:
            return
        if self.state.toggle(todo_id) is None:
            self.stdout.write(f"No todo {todo_id}\n")
            return
        self._show()

    def do_edit(self, arg):
        """edit ID TITLE: rename a todo"""
        todo_id = self._parse_id(arg)
        if todo_id is None:
            return
        parts = arg.split(maxsplit=1)
        title = parts[1] if len(parts) > 1 else ""
        if self.state.update(todo_id, title) is None:
            self.stdout.write("Usage: edit ID TITLE (existing id, non-empty title)\n")
            return
        self._show()

    def do_rm(self, arg):
        """rm ID: delete a todo"""
        todo_id = self._parse_id(arg)
        if todo_id is None:
            return
        self.state.delete(todo_id)
        self._show()

    def do_quit(self, arg):
        """quit: leave the shell"""
        return True

    do_EOF = do_quit


def main(argv=None):
    parser = argparse.ArgumentParser(description="Todo Master terminal client")
    parser.add_argument("--url", default=os.getenv("TODO_API_URL", "http://localhost:5000"),
                        help="Server base URL")
    parser.add_argument("--timeout", type=float, default=10.0)
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())
    state = TodoState(TodoRpcClient(args.url, timeout=args.timeout))
    TodoShell(state).cmdloop()


if __name__ == "__main__":
    main()
