"""Blocking HTTP access to an algod node.

Every request goes through ``NetworkClient._send``, which applies the timeout,
the API token header and the retry policy, and turns any ``requests`` failure
into a ``NetworkError``. Used for the node status probe; transactions go
through ``asa_creator.ledger``.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

import requests

logger = logging.getLogger(__name__)

API_TOKEN_HEADER = "X-Algo-API-Token"


class NetworkErrorType(Enum):
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    HTTP_ERROR = "http_error"
    UNKNOWN = "unknown"


@dataclass
class NetworkError(Exception):
    error_type: NetworkErrorType
    message: str
    original_error: Exception | None = None
    status_code: int | None = None
    response_text: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass
class TimeoutConfig:
    connect_timeout: float = 5.0
    read_timeout: float = 15.0

    @property
    def request_timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


@dataclass
class RetryConfig:
    """Backoff for idempotent reads. Disabled unless ``max_retries`` is raised."""

    max_retries: int = 0
    base_delay: float = 1.0
    max_delay: float = 30.0
    backoff_factor: float = 2.0
    retry_statuses: frozenset[int] = field(
        default_factory=lambda: frozenset({408, 429, 500, 502, 503, 504})
    )

    def delay_for(self, attempt: int) -> float:
        return min(self.base_delay * self.backoff_factor**attempt, self.max_delay)

    def is_retryable(self, error: Exception) -> bool:
        if isinstance(error, (requests.Timeout, requests.ConnectionError)):
            return True
        if isinstance(error, requests.HTTPError):
            return _status_of(error) in self.retry_statuses
        return False


_ERROR_KINDS: tuple[tuple[type[Exception], NetworkErrorType], ...] = (
    (requests.Timeout, NetworkErrorType.TIMEOUT),
    (requests.ConnectionError, NetworkErrorType.CONNECTION_ERROR),
    (requests.HTTPError, NetworkErrorType.HTTP_ERROR),
)


def _status_of(error: Exception) -> int | None:
    return getattr(getattr(error, "response", None), "status_code", None)


def _node_message(response: Any) -> str | None:
    """algod reports failures as ``{"message": "..."}``; fall back to raw text."""
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return getattr(response, "text", None) or None


def error_kind(error: Exception) -> NetworkErrorType:
    for exc_type, kind in _ERROR_KINDS:
        if isinstance(error, exc_type):
            return kind
    return NetworkErrorType.UNKNOWN


def describe_failure(error: Exception, node_url: str, context: str = "") -> NetworkError:
    """Wrap a transport failure with a message naming the node and the step."""
    kind = error_kind(error)
    prefix = f"{context}: " if context else ""
    status_code = None
    detail = None

    if kind is NetworkErrorType.TIMEOUT:
        message = f"{prefix}Connection timeout. Node may be unavailable: {node_url}"
    elif kind is NetworkErrorType.CONNECTION_ERROR:
        message = f"{prefix}Cannot connect to node: {node_url}. Check your network connection."
    elif kind is NetworkErrorType.HTTP_ERROR:
        status_code = _status_of(error)
        detail = _node_message(getattr(error, "response", None))
        message = f"{prefix}HTTP error {status_code}: {detail or 'no details from node'}"
    else:
        message = f"{prefix}Network error: {error}"

    return NetworkError(
        error_type=kind,
        message=message,
        original_error=error,
        status_code=status_code,
        response_text=detail,
    )


class NetworkClient:
    def __init__(
        self,
        node_url: str,
        api_token: str = "",
        timeout_config: TimeoutConfig | None = None,
        retry_config: RetryConfig | None = None,
        on_retry: Callable[[int, Exception, float], None] | None = None,
        session: requests.Session | None = None,
    ):
        self.node_url = node_url.rstrip("/")
        self.api_token = api_token
        self.timeout_config = timeout_config or TimeoutConfig()
        self.retry_config = retry_config or RetryConfig()
        self.on_retry = on_retry
        self.session = session or requests.Session()

    def _send(
        self,
        method: str,
        endpoint: str,
        context: str,
        attempts: int,
        **kwargs,
    ) -> Any:
        url = f"{self.node_url}{endpoint}"
        kwargs.setdefault("timeout", self.timeout_config.request_timeout)
        headers = {API_TOKEN_HEADER: self.api_token} if self.api_token else {}
        headers.update(kwargs.pop("headers", None) or {})

        for attempt in range(attempts):
            try:
                response = self.session.request(method, url, headers=headers, **kwargs)
                response.raise_for_status()
                return response.json() if response.content else {}
            except requests.RequestException as e:
                retrying = attempt + 1 < attempts and self.retry_config.is_retryable(e)
                if not retrying:
                    raise describe_failure(e, self.node_url, context) from e

                delay = self.retry_config.delay_for(attempt)
                logger.warning(
                    "%s %s failed (attempt %d/%d), retrying in %.1fs: %s",
                    method,
                    endpoint,
                    attempt + 1,
                    attempts,
                    delay,
                    e,
                )
                if self.on_retry:
                    self.on_retry(attempt + 1, e, delay)
                time.sleep(delay)

        raise NetworkError(NetworkErrorType.UNKNOWN, f"{context}: no attempt was made")

    def get(self, endpoint: str, context: str = "", **kwargs) -> dict[str, Any]:
        return self._send(
            "GET", endpoint, context, self.retry_config.max_retries + 1, **kwargs
        )

    def node_health(self) -> dict[str, Any]:
        status = self.get("/v2/status", context="Node status check")
        last_round = int(status.get("last-round", 0))
        catching_up = int(status.get("catchup-time", 0)) > 0
        healthy = last_round > 0 and not catching_up
        logger.info(
            "Node %s healthy=%s last_round=%s", self.node_url, healthy, last_round
        )
        return {"healthy": healthy, "last_round": last_round, "url": self.node_url}
