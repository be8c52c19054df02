#!/usr/bin/env python3
"""
Seed a few todos for manual testing of the web and terminal clients.
Goes through the same handlers the RPC API uses.
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from services import todo_service
from services.todo_inputs import CreateTodoInput, ToggleTodoInput

SEED_TODOS = [
    ("Welcome to Todo Master! 🎉", False),
    ("Try editing this task by clicking the pencil icon ✏️", False),
    ("Mark this as completed by clicking the circle ✅", True),
]


def seed_todos():
    """Create the seed todos unless the list already has entries."""
    app = create_app()

    with app.app_context():
        existing = todo_service.get_todos()
        if existing:
            print(f"✅ {len(existing)} todos already present - nothing to do")
            return existing

        created = []
        for title, completed in SEED_TODOS:
            todo = todo_service.create_todo(CreateTodoInput(title=title))
            if completed:
                todo = todo_service.toggle_todo(ToggleTodoInput(id=todo['id']))
            created.append(todo)
            print(f"✅ Created todo {todo['id']}: {todo['title']}")
        return created


if __name__ == "__main__":
    seed_todos()
