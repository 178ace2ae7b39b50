"""Tests for sequential dispatch."""
from unittest.mock import Mock, call

import pytest

from ns_fetch.api.dispatcher import Dispatcher
from ns_fetch.errors import BatchDispatchError, TransportError, ValidationError


URL = "https://123456.suitetalk.api.netsuite.com/services/rest/record/v1/customer"


@pytest.fixture
def client():
    """Client that echoes each payload back with an id"""
    mock = Mock()
    mock.request.side_effect = lambda method, url, payload=None: {"id": payload["n"]} if payload else {}
    return mock


class TestDispatchOne:
    """Single requests."""

    def test_passes_through(self, client):
        result = Dispatcher(client).dispatch_one("post", URL, {"n": 1})

        assert result == {"id": 1}
        client.request.assert_called_once_with("POST", URL, {"n": 1})

    def test_without_payload(self, client):
        Dispatcher(client).dispatch_one("DELETE", f"{URL}/5")
        client.request.assert_called_once_with("DELETE", f"{URL}/5", None)

    def test_unsupported_method(self, client):
        with pytest.raises(ValidationError):
            Dispatcher(client).dispatch_one("PUT", URL, {"n": 1})
        client.request.assert_not_called()

    def test_transport_error_propagates(self, client):
        client.request.side_effect = TransportError("HTTP 404", status_code=404, body={"title": "Not Found"})

        with pytest.raises(TransportError) as exc_info:
            Dispatcher(client).dispatch_one("GET", URL)

        assert exc_info.value.status_code == 404


class TestDispatchMany:
    """Batches."""

    def test_order_preserved(self, client):
        records = [{"n": i} for i in range(4)]
        results = Dispatcher(client, URL).dispatch_many(records)

        assert results == [{"id": 0}, {"id": 1}, {"id": 2}, {"id": 3}]
        assert client.request.call_args_list == [call("POST", URL, r) for r in records]

    def test_explicit_url(self, client):
        other = f"{URL}/../vendor"
        Dispatcher(client, URL).dispatch_many([{"n": 1}], url=other)
        client.request.assert_called_once_with("POST", other, {"n": 1})

    def test_empty_batch(self, client):
        assert Dispatcher(client, URL).dispatch_many([]) == []
        client.request.assert_not_called()

    def test_first_failure_aborts(self, client):
        """p2 fails: p1's response is kept, p3 is never sent"""
        failure = TransportError("HTTP 400", status_code=400, body={"title": "Bad"})
        client.request.side_effect = [{"id": 1}, failure, {"id": 3}]

        with pytest.raises(BatchDispatchError) as exc_info:
            Dispatcher(client, URL).dispatch_many([{"n": 1}, {"n": 2}, {"n": 3}])

        error = exc_info.value
        assert error.index == 1
        assert error.completed == [{"id": 1}]
        assert error.status_code == 400
        assert error.body == {"title": "Bad"}
        assert error.cause is failure
        assert client.request.call_count == 2

    def test_failure_on_first_record(self, client):
        client.request.side_effect = TransportError("connection refused")

        with pytest.raises(BatchDispatchError) as exc_info:
            Dispatcher(client, URL).dispatch_many([{"n": 1}, {"n": 2}])

        assert exc_info.value.index == 0
        assert exc_info.value.completed == []
        assert not exc_info.value.is_http_error

    def test_progress_callback(self, client):
        progress = Mock()
        Dispatcher(client, URL).dispatch_many([{"n": 1}, {"n": 2}], on_progress=progress)

        assert progress.call_args_list == [call(1, 2), call(2, 2)]

    def test_missing_url(self, client):
        with pytest.raises(ValidationError):
            Dispatcher(client).dispatch_many([{"n": 1}])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
