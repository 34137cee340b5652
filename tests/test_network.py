"""Unit tests for algod HTTP access, timeouts and retry logic."""

import pytest
from unittest.mock import Mock, patch
from requests.exceptions import Timeout, ConnectionError, HTTPError

from asa_creator.shared.network import (
    API_TOKEN_HEADER,
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    TimeoutConfig,
    RetryConfig,
    describe_failure,
    error_kind,
)


def _response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    response.text = text
    response.content = b"{}" if payload is not None else b""
    if status_code >= 400:
        response.raise_for_status.side_effect = HTTPError(response=response)
    return response


@pytest.fixture
def session():
    return Mock()


def _client(session, **kwargs):
    return NetworkClient("http://node.test/", session=session, **kwargs)


class TestTimeoutConfig:
    def test_default_values(self):
        config = TimeoutConfig()
        assert config.connect_timeout == 5.0
        assert config.read_timeout == 15.0

    def test_request_timeout_tuple(self):
        config = TimeoutConfig(connect_timeout=3.0, read_timeout=10.0)
        assert config.request_timeout == (3.0, 10.0)


class TestRetryConfig:
    def test_retries_disabled_by_default(self):
        assert RetryConfig().max_retries == 0

    def test_delay_grows_exponentially(self):
        config = RetryConfig(base_delay=1.0, backoff_factor=2.0, max_delay=30.0)
        assert [config.delay_for(n) for n in range(4)] == [1.0, 2.0, 4.0, 8.0]

    def test_delay_capped(self):
        config = RetryConfig(base_delay=1.0, backoff_factor=2.0, max_delay=10.0)
        assert config.delay_for(5) == 10.0

    def test_transient_errors_retryable(self):
        config = RetryConfig()
        assert config.is_retryable(Timeout("t")) is True
        assert config.is_retryable(ConnectionError("c")) is True

    @pytest.mark.parametrize("status_code", [408, 429, 500, 502, 503, 504])
    def test_retryable_statuses(self, status_code):
        error = HTTPError(response=_response(status_code))
        assert RetryConfig().is_retryable(error) is True

    @pytest.mark.parametrize("status_code", [400, 401, 403, 404])
    def test_client_errors_not_retryable(self, status_code):
        error = HTTPError(response=_response(status_code))
        assert RetryConfig().is_retryable(error) is False

    def test_other_errors_not_retryable(self):
        assert RetryConfig().is_retryable(ValueError("x")) is False


class TestDescribeFailure:
    def test_error_kinds(self):
        assert error_kind(Timeout("t")) == NetworkErrorType.TIMEOUT
        assert error_kind(ConnectionError("c")) == NetworkErrorType.CONNECTION_ERROR
        assert error_kind(HTTPError(response=_response(500))) == NetworkErrorType.HTTP_ERROR
        assert error_kind(ValueError("v")) == NetworkErrorType.UNKNOWN

    def test_timeout_names_node(self):
        error = Timeout("Connection timed out")
        network_error = describe_failure(error, "http://node.test", "Fetch params")
        assert network_error.error_type == NetworkErrorType.TIMEOUT
        assert network_error.message.startswith("Fetch params: Connection timeout")
        assert "node.test" in network_error.message
        assert network_error.original_error is error

    def test_http_error_uses_algod_message(self):
        response = _response(400, payload={"message": "overspend (balance 0)"})
        network_error = describe_failure(
            HTTPError(response=response), "http://node.test", "Send transaction"
        )
        assert network_error.status_code == 400
        assert network_error.response_text == "overspend (balance 0)"
        assert network_error.message == "Send transaction: HTTP error 400: overspend (balance 0)"

    def test_http_error_falls_back_to_text(self):
        response = _response(500, text="Internal Server Error")
        response.json.side_effect = ValueError("not json")
        network_error = describe_failure(HTTPError(response=response), "http://node.test")
        assert network_error.response_text == "Internal Server Error"

    def test_unknown_error(self):
        network_error = describe_failure(ValueError("boom"), "http://node.test")
        assert network_error.error_type == NetworkErrorType.UNKNOWN
        assert "boom" in str(network_error)


class TestNetworkClient:
    def test_strips_trailing_slash(self, session):
        assert _client(session).node_url == "http://node.test"

    def test_get_returns_json(self, session):
        session.request.return_value = _response(payload={"last-round": 7})

        assert _client(session).get("/v2/status") == {"last-round": 7}

        args, kwargs = session.request.call_args
        assert args == ("GET", "http://node.test/v2/status")
        assert kwargs["timeout"] == (5.0, 15.0)

    def test_api_token_header_sent(self, session):
        session.request.return_value = _response(payload={})
        _client(session, api_token="secret-token").get("/v2/status")
        headers = session.request.call_args.kwargs["headers"]
        assert headers[API_TOKEN_HEADER] == "secret-token"

    def test_no_token_header_when_empty(self, session):
        session.request.return_value = _response(payload={})
        _client(session).get("/v2/status")
        assert API_TOKEN_HEADER not in session.request.call_args.kwargs["headers"]

    def test_get_single_attempt_by_default(self, session):
        session.request.side_effect = Timeout("Timeout")

        with pytest.raises(NetworkError) as exc_info:
            _client(session).get("/v2/status")

        assert session.request.call_count == 1
        assert exc_info.value.error_type == NetworkErrorType.TIMEOUT

    def test_http_error_raised(self, session):
        session.request.return_value = _response(404)

        with pytest.raises(NetworkError) as exc_info:
            _client(session).get("/v2/transactions/pending/X")

        assert exc_info.value.error_type == NetworkErrorType.HTTP_ERROR
        assert exc_info.value.status_code == 404

    def test_retries_reads_when_enabled(self, session):
        retry_calls = []
        session.request.side_effect = [
            Timeout("Timeout"),
            ConnectionError("reset"),
            _response(payload={"success": True}),
        ]
        client = _client(
            session,
            retry_config=RetryConfig(max_retries=2, base_delay=0.01),
            on_retry=lambda attempt, error, delay: retry_calls.append(attempt),
        )

        with patch("asa_creator.shared.network.time.sleep") as sleep:
            result = client.get("/endpoint")

        assert result == {"success": True}
        assert retry_calls == [1, 2]
        assert sleep.call_count == 2

    def test_gives_up_after_max_retries(self, session):
        session.request.side_effect = Timeout("Always timeout")
        client = _client(session, retry_config=RetryConfig(max_retries=2, base_delay=0.01))

        with patch("asa_creator.shared.network.time.sleep"):
            with pytest.raises(NetworkError) as exc_info:
                client.get("/endpoint")

        assert session.request.call_count == 3
        assert exc_info.value.error_type == NetworkErrorType.TIMEOUT


class TestNodeHealth:
    def test_healthy(self, session):
        session.request.return_value = _response(
            payload={"last-round": 4200, "catchup-time": 0}
        )
        assert _client(session).node_health() == {
            "healthy": True,
            "last_round": 4200,
            "url": "http://node.test",
        }

    def test_catching_up(self, session):
        session.request.return_value = _response(
            payload={"last-round": 10, "catchup-time": 5000}
        )
        assert _client(session).node_health()["healthy"] is False
