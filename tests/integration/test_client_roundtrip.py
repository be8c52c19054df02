"""
Drives the client state layer against the real RPC blueprint by routing the
requests session through the Flask test client.
"""
import pytest
from urllib.parse import urlsplit

from client.rpc import TodoRpcClient
from client.state import TodoState


class _TestClientResponse:

    def __init__(self, response):
        self.status_code = response.status_code
        self._response = response

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("Response body is not JSON")
        return data


class FlaskTestSession:
    """Stands in for requests.Session, forwarding calls to app.test_client()."""

    def __init__(self, client):
        self.client = client

    def get(self, url, params=None, timeout=None):
        return _TestClientResponse(self.client.get(urlsplit(url).path, query_string=params))

    def post(self, url, json=None, timeout=None):
        return _TestClientResponse(self.client.post(urlsplit(url).path, json=json))


@pytest.fixture
def state(client):
    s = TodoState(TodoRpcClient('http://localhost', session=FlaskTestSession(client)))
    s.load()
    return s


@pytest.mark.integration
class TestClientRoundtrip:

    def test_starts_empty_and_online(self, state):
        assert state.todos == []
        assert state.degraded is False

    def test_full_lifecycle(self, state, rpc):
        first = state.create('First')
        second = state.create('Second')
        assert [t['id'] for t in state.todos] == [second['id'], first['id']]

        state.toggle(first['id'])
        state.update(second['id'], 'Second, renamed')
        state.delete(first['id'])

        assert state.degraded is False
        _, body = rpc('getTodos')
        assert body['result'] == [
            {**second, 'title': 'Second, renamed', 'created_at': second['created_at'].isoformat()}
        ]

    def test_server_not_found_switches_to_degraded(self, state, rpc):
        todo = state.create('Deleted elsewhere')
        rpc('deleteTodo', {'id': todo['id']})

        state.toggle(todo['id'])

        assert state.degraded is True
        assert state.last_error.code == 'NOT_FOUND'
        assert state.find(todo['id'])['completed'] is True

        state.load()
        assert state.degraded is False
        assert state.todos == []
