"""
Unit tests for the todo handlers, run against an in-memory SQLite database.
"""

import pytest
from datetime import datetime, timedelta

from models import Todo
from models.todo import MAX_TODO_ID
from services import todo_service
from services.todo_errors import TodoNotFoundError
from services.todo_inputs import (
    CreateTodoInput, UpdateTodoInput, ToggleTodoInput, DeleteTodoInput
)


def _create(title):
    return todo_service.create_todo(CreateTodoInput(title=title))


class TestGetTodos:

    def test_empty(self, app):
        assert todo_service.get_todos() == []

    def test_returns_all_todos(self, make_todo):
        make_todo('First todo')
        make_todo('Second todo', completed=True)
        make_todo('Third todo')

        result = todo_service.get_todos()

        assert len(result) == 3
        for todo in result:
            assert isinstance(todo['id'], int)
            assert isinstance(todo['title'], str)
            assert isinstance(todo['completed'], bool)
            assert datetime.fromisoformat(todo['created_at'])

    def test_newest_first(self, app):
        for title in ('First', 'Second', 'Third'):
            _create(title)

        titles = [t['title'] for t in todo_service.get_todos()]
        assert titles == ['Third', 'Second', 'First']

    def test_orders_by_created_at_not_id(self, make_todo):
        base = datetime(2026, 1, 1, 12, 0, 0)
        older = make_todo('Older', created_at=base)
        newer = make_todo('Newer', created_at=base + timedelta(days=1))
        oldest = make_todo('Oldest', created_at=base - timedelta(days=1))

        ids = [t['id'] for t in todo_service.get_todos()]
        assert ids == [newer.id, older.id, oldest.id]

    def test_timestamp_ties_broken_by_id_descending(self, make_todo):
        stamp = datetime(2026, 1, 1, 12, 0, 0)
        a = make_todo('A', created_at=stamp)
        b = make_todo('B', created_at=stamp)
        c = make_todo('C', created_at=stamp)

        ids = [t['id'] for t in todo_service.get_todos()]
        assert ids == [c.id, b.id, a.id]

    def test_returns_exactly_the_created_set(self, app):
        created = {_create(f'Todo {i}')['id'] for i in range(5)}
        assert {t['id'] for t in todo_service.get_todos()} == created


class TestCreateTodo:

    def test_creates_incomplete_todo(self, app):
        todo = _create('Test')

        assert todo['title'] == 'Test'
        assert todo['completed'] is False
        assert isinstance(todo['id'], int)
        assert isinstance(datetime.fromisoformat(todo['created_at']), datetime)

    def test_persists_row(self, db_session):
        todo = _create('Persisted')
        row = db_session.get(Todo, todo['id'])
        assert row is not None
        assert row.title == 'Persisted'
        assert row.completed is False

    def test_ids_are_unique(self, app):
        assert _create('a')['id'] != _create('b')['id']

    def test_created_at_carries_utc_offset(self, app):
        created_at = datetime.fromisoformat(_create('Stamped')['created_at'])
        assert created_at.utcoffset() == timedelta(0)


class TestUpdateTodo:

    def test_changes_only_title(self, app):
        before = _create('Original')
        after = todo_service.update_todo(UpdateTodoInput(id=before['id'], title='Renamed'))

        assert after['title'] == 'Renamed'
        assert after['id'] == before['id']
        assert after['completed'] == before['completed']
        assert after['created_at'] == before['created_at']

    def test_keeps_completed_flag(self, app):
        todo = _create('Done already')
        todo_service.toggle_todo(ToggleTodoInput(id=todo['id']))

        after = todo_service.update_todo(UpdateTodoInput(id=todo['id'], title='Still done'))
        assert after['completed'] is True

    def test_without_title_is_a_no_op(self, app):
        before = _create('Unchanged')
        after = todo_service.update_todo(UpdateTodoInput(id=before['id']))
        assert after == before

    def test_missing_id_raises_not_found(self, app):
        with pytest.raises(TodoNotFoundError) as exc_info:
            todo_service.update_todo(UpdateTodoInput(id=999, title='Ghost'))
        assert exc_info.value.todo_id == 999
        assert todo_service.get_todos() == []


class TestToggleTodo:

    def test_flips_completed(self, app):
        todo = _create('Flip me')
        toggled = todo_service.toggle_todo(ToggleTodoInput(id=todo['id']))
        assert toggled['completed'] is True

    def test_double_toggle_restores_value(self, app):
        todo = _create('Flip twice')
        todo_service.toggle_todo(ToggleTodoInput(id=todo['id']))
        again = todo_service.toggle_todo(ToggleTodoInput(id=todo['id']))

        assert again['completed'] is False
        assert again['title'] == todo['title']
        assert again['created_at'] == todo['created_at']

    def test_missing_id_raises_not_found(self, app):
        with pytest.raises(TodoNotFoundError):
            todo_service.toggle_todo(ToggleTodoInput(id=12345))

    @pytest.mark.parametrize('todo_id', [MAX_TODO_ID + 1, 2**63])
    def test_out_of_range_id_raises_not_found(self, app, todo_id):
        with pytest.raises(TodoNotFoundError) as exc_info:
            todo_service.toggle_todo(ToggleTodoInput(id=todo_id))
        assert exc_info.value.todo_id == todo_id


class TestDeleteTodo:

    def test_removes_row(self, app):
        keep = _create('Keep')
        gone = _create('Gone')

        assert todo_service.delete_todo(DeleteTodoInput(id=gone['id'])) == {'success': True}
        assert [t['id'] for t in todo_service.get_todos()] == [keep['id']]

    def test_missing_id_is_idempotent(self, app):
        todo = _create('Only')
        assert todo_service.delete_todo(DeleteTodoInput(id=todo['id'] + 100)) == {'success': True}
        assert [t['id'] for t in todo_service.get_todos()] == [todo['id']]

    def test_out_of_range_id_is_idempotent(self, app):
        todo = _create('Only')
        assert todo_service.delete_todo(DeleteTodoInput(id=2**63)) == {'success': True}
        assert [t['id'] for t in todo_service.get_todos()] == [todo['id']]

    def test_delete_twice(self, app):
        todo = _create('Twice')
        todo_service.delete_todo(DeleteTodoInput(id=todo['id']))
        assert todo_service.delete_todo(DeleteTodoInput(id=todo['id'])) == {'success': True}
        assert todo_service.get_todos() == []

    def test_deleted_todo_cannot_be_toggled(self, app):
        todo = _create('Deleted')
        todo_service.delete_todo(DeleteTodoInput(id=todo['id']))
        with pytest.raises(TodoNotFoundError):
            todo_service.toggle_todo(ToggleTodoInput(id=todo['id']))
