"""
Root pytest configuration and fixtures for unit and integration tests.
"""
import pytest
import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Test configuration
os.environ['FLASK_ENV'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['SESSION_SECRET'] = 'test-secret-key-for-testing-only'


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: HTTP-level tests against the Flask test client")


@pytest.fixture(scope='function')
def app():
    """Create a test Flask application with a fresh in-memory database."""
    from app import create_app
    from models import db

    test_app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    })

    with test_app.app_context():
        yield test_app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create a test client for the Flask application."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Database session bound to the test app."""
    from models import db

    yield db.session
    db.session.rollback()


@pytest.fixture(scope='function')
def make_todo(db_session):
    """Insert a todo row directly, bypassing the handlers."""
    from models import Todo

    def _make(title='Test todo', completed=False, created_at=None):
        todo = Todo(title=title, completed=completed)
        if created_at is not None:
            todo.created_at = created_at
        db_session.add(todo)
        db_session.commit()
        return todo

    return _make


@pytest.fixture(scope='function')
def rpc(client):
    """Call a procedure through the test client and return (status, body)."""
    import json

    def _call(procedure, payload=None, method=None):
        from routes.api_todos import PROCEDURES

        proc = PROCEDURES.get(procedure)
        method = method or (proc.http_method if proc else 'POST')
        if method == 'GET':
            query = {'input': json.dumps(payload)} if payload is not None else None
            response = client.get(f'/api/rpc/{procedure}', query_string=query)
        else:
            response = client.post(f'/api/rpc/{procedure}', json=payload)
        return response.status_code, response.get_json()

    return _call
