"""
Authenticated HTTP transport for the Wallet API

Every call is a POST of ``{"name": ..., "payload": ...}`` to ``/query`` (reads)
or ``/command`` (writes), authorized by a bearer token signed for that exact
body, route and moment. A fresh token is built for every attempt.

Failure handling per response class:

- 429 with ``Retry-After``: wait the given seconds and retry. Unbounded, and
  does not consume the retry budget.
- 5xx on a query: retry after ``retry_interval`` until ``max_read_retry``
  attempts were made. Commands are never retried on 5xx because the server
  may already have executed them.
- Other 4xx: raised immediately.
- Network failures and timeouts: raised immediately as ``TransportError``.
"""

import json
import time
import logging
import threading
import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from requests.adapters import HTTPAdapter

from .config import ClientOptions
from .credentials import (
    Credentials,
    CredentialSource,
    DynamicCredentialSource,
    StaticCredentialSource,
)
from .error_codes import code_for_status
from .exceptions import (
    APIError,
    RequestCancelledError,
    ResponseDecodeError,
    TransportError,
    ValidationError,
)
from .signing import Route, TOKEN_TTL_SECONDS, build_claims, sign_claims

logger = logging.getLogger(__name__)

ResponseType = Callable[[Dict[str, Any]], Any]


class OperationKind(str, Enum):
    """Kinds of remote operations and their retry policy"""
    QUERY = "query"
    COMMAND = "command"

    @property
    def route(self) -> Route:
        return Route.QUERY if self is OperationKind.QUERY else Route.COMMAND

    @property
    def retries_server_errors(self) -> bool:
        # a command answered with 5xx may have been applied already
        return self is OperationKind.QUERY


@dataclass
class RetryState:
    """Retry bookkeeping of one logical operation"""
    max_attempts: int
    interval: float
    attempts: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempts >= self.max_attempts - 1

    def record_retry(self) -> None:
        self.attempts += 1


@dataclass
class RequestContext:
    """
    Cancellation and deadline for a single call.

    Setting ``cancel_event`` from another thread aborts a pending retry wait
    at once and stops further attempts. It does not interrupt a request that
    is already in flight: that attempt runs until it completes or its HTTP
    timeout expires. ``deadline`` is a ``time.monotonic()`` value; the HTTP
    timeout of each attempt is capped at the time left, so only the deadline
    bounds an in-flight request.
    """
    cancel_event: threading.Event = field(default_factory=threading.Event)
    deadline: Optional[float] = None

    @classmethod
    def with_timeout(cls, seconds: float, cancel_event: Optional[threading.Event] = None) -> "RequestContext":
        return cls(
            cancel_event=cancel_event or threading.Event(),
            deadline=time.monotonic() + seconds,
        )

    def cancel(self) -> None:
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def raise_if_done(self) -> None:
        if self.cancelled:
            raise RequestCancelledError()
        if self.expired:
            raise RequestCancelledError("request deadline exceeded")

    def cap_timeout(self, timeout: float) -> float:
        """Shorten ``timeout`` so an attempt cannot outlive the deadline."""
        remaining = self.remaining()
        if remaining is None:
            return timeout
        if remaining <= 0:
            raise RequestCancelledError("request deadline exceeded")
        return min(timeout, remaining)

    def wait(self, seconds: float) -> None:
        """
        Block for ``seconds`` unless cancelled first.

        Raises:
            RequestCancelledError: If the context is cancelled during the wait,
                or the deadline falls before the wait would end
        """
        seconds = min(seconds, threading.TIMEOUT_MAX)
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            if self.cancel_event.wait(remaining):
                raise RequestCancelledError()
            raise RequestCancelledError("request deadline exceeded while waiting to retry")

        if self.cancel_event.wait(seconds):
            raise RequestCancelledError()


def encode_envelope(name: str, payload: Any = None) -> bytes:
    """
    Serialize the operation envelope to the exact bytes sent over the wire.

    Raises:
        ValidationError: If the name is empty or the payload is not serializable
    """
    if not name:
        raise ValidationError("Operation name cannot be empty")

    envelope = {
        'name': name,
        'payload': _payload_to_dict(payload),
    }
    try:
        return json.dumps(envelope, separators=(',', ':'), ensure_ascii=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Payload for {name} is not JSON serializable: {e}") from e


def _payload_to_dict(payload: Any) -> Any:
    if payload is None:
        return {}
    if isinstance(payload, Mapping):
        return dict(payload)
    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        return {k: v for k, v in dataclasses.asdict(payload).items() if v is not None}
    to_dict = getattr(payload, 'to_dict', None)
    if callable(to_dict):
        return to_dict()
    raise ValidationError(
        f"Unsupported payload type {type(payload).__name__}; "
        "use a mapping, a dataclass or an object with to_dict()"
    )


def classify_error(response: requests.Response) -> APIError:
    """
    Build an ``APIError`` from a non-2xx response.

    The body is expected to be ``{"statusCode", "code", "message"}``. When it
    cannot be decoded the error is derived from the HTTP status alone.
    """
    status_code = response.status_code
    fallback_message = f"HTTP {status_code}: {response.reason}" if response.reason else f"HTTP {status_code}"

    try:
        error_data = response.json()
    except ValueError:
        error_data = None

    if not isinstance(error_data, dict):
        return APIError(status_code, code_for_status(status_code), fallback_message)

    code = error_data.get('code')
    message = error_data.get('message')
    if not isinstance(code, str) or not code:
        code = code_for_status(status_code)
    if not isinstance(message, str) or not message:
        message = fallback_message

    return APIError(status_code, code, message)


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Seconds to wait from a Retry-After header, or None when absent or invalid."""
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    if seconds < 0:
        return None
    return min(seconds, int(threading.TIMEOUT_MAX))


class WalletClient:
    """
    Client for the Wallet API.

    Holds configuration and the credential source used to sign requests.
    Safe to share between threads: every call owns its claims, credentials and
    retry state, and the only shared resource is the HTTP session.
    """

    def __init__(
        self,
        options: Optional[ClientOptions] = None,
        credential_source: Optional[CredentialSource] = None
    ):
        """
        Initialize the client.

        Args:
            options: Client configuration; defaults are used when omitted
            credential_source: Explicit credential source. Takes precedence over
                ``options.credentials_loader`` and ``set_credentials``.
        """
        self.options = options or ClientOptions()
        self._owns_session = self.options.session is None
        self.session = self.options.session or self._create_session()

        if credential_source is not None:
            self.credential_source = credential_source
        elif self.options.credentials_loader is not None:
            self.credential_source = DynamicCredentialSource(self.options.credentials_loader)
        else:
            self.credential_source = StaticCredentialSource()

        logger.info(f"Initialized Wallet client for endpoint: {self.options.endpoint}")

    def _create_session(self) -> requests.Session:
        """Create HTTP session; retries are decided per response, never by the adapter"""
        session = requests.Session()
        adapter = HTTPAdapter(max_retries=0)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def set_credentials(self, key_id: str, private_key_pem: bytes) -> None:
        """
        Store credentials on the client instance.

        Ignored when the client retrieves credentials through a loader or an
        explicit credential source.
        """
        if not isinstance(self.credential_source, StaticCredentialSource):
            if self.options.debug:
                logger.info("Ignoring set_credentials call as a credentials loader was set to the client")
            return
        self.credential_source.set_credentials(Credentials(key_id=key_id, private_key_pem=private_key_pem))

    def query(
        self,
        name: str,
        payload: Any = None,
        response_type: Optional[ResponseType] = None,
        context: Optional[RequestContext] = None
    ) -> Any:
        """
        Invoke a read operation.

        Args:
            name: Remote operation name, e.g. ``list_client_accounts``
            payload: Request payload (mapping, dataclass or object with to_dict)
            response_type: Applied to the decoded JSON object. Classes with a
                ``from_dict`` classmethod are built through it.
            context: Optional cancellation/deadline context

        Returns:
            Decoded response, converted by ``response_type`` when given

        Raises:
            APIError: On a terminal error response
            TransportError: On network failures
            RequestCancelledError: If the context fires
            CredentialsError, SigningError: If the request cannot be signed
        """
        return self._execute(OperationKind.QUERY, name, payload, response_type, context)

    def command(
        self,
        name: str,
        payload: Any = None,
        response_type: Optional[ResponseType] = None,
        context: Optional[RequestContext] = None
    ) -> Any:
        """
        Invoke a state-changing operation.

        Same contract as ``query`` except that server errors are never
        retried; only rate-limited responses are.
        """
        return self._execute(OperationKind.COMMAND, name, payload, response_type, context)

    def _execute(
        self,
        kind: OperationKind,
        name: str,
        payload: Any,
        response_type: Optional[ResponseType],
        context: Optional[RequestContext]
    ) -> Any:
        context = context or RequestContext()
        route = kind.route
        body = encode_envelope(name, payload)
        retry_state = RetryState(
            max_attempts=self.options.max_read_retry,
            interval=self.options.retry_interval,
        )

        while True:
            context.raise_if_done()

            token = self._authorize(route, body)
            response = self._send(route, body, token, context)
            token = None

            if response.status_code < 400:
                return self._decode_response(response, response_type)

            error = classify_error(response)

            if response.status_code == 429:
                delay = parse_retry_after(response.headers.get('Retry-After'))
                if delay is None:
                    raise error
                logger.warning(f"Rate limited on {name}, retrying in {delay}s")
                context.wait(delay)
                continue

            if response.status_code >= 500 and kind.retries_server_errors:
                if retry_state.exhausted:
                    raise error
                retry_state.record_retry()
                logger.warning(
                    f"Server error {response.status_code} on {name}, "
                    f"retry {retry_state.attempts}/{retry_state.max_attempts - 1}"
                )
                context.wait(retry_state.interval)
                continue

            raise error

    def _authorize(self, route: Route, body: bytes) -> str:
        """Sign a bearer token for one attempt"""
        credentials = self.credential_source.get_credentials()
        try:
            claims = build_claims(credentials.key_id, route, body, TOKEN_TTL_SECONDS)
            return sign_claims(claims, credentials.private_key_pem)
        finally:
            if self.credential_source.ephemeral:
                credentials.clear()
            credentials = None

    def _send(self, route: Route, body: bytes, token: str, context: RequestContext) -> requests.Response:
        url = f"{self.options.endpoint}{route.value}"
        headers = {
            'Authorization': f"Bearer {token}",
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': self.options.user_agent,
        }
        timeout = context.cap_timeout(self.options.timeout)

        if self.options.debug:
            self._log_request(url, headers, body)

        try:
            response = self.session.request('POST', url, data=body, headers=headers, timeout=timeout)
        except requests.exceptions.Timeout as e:
            if context.expired:
                raise RequestCancelledError("request deadline exceeded while waiting for response") from e
            raise TransportError(f"Request timeout after {timeout} seconds", "TIMEOUT") from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error: {e}", "CONNECTION_ERROR") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}") from e

        if self.options.debug:
            self._log_response(response)

        return response

    def _decode_response(self, response: requests.Response, response_type: Optional[ResponseType]) -> Any:
        if not response.content:
            data: Any = {}
        else:
            try:
                data = response.json()
            except ValueError as e:
                raise ResponseDecodeError(
                    f"Invalid JSON response: {e}",
                    "INVALID_RESPONSE",
                    {'status_code': response.status_code}
                ) from e

        if response_type is None:
            return data

        from_dict = getattr(response_type, 'from_dict', None)
        if callable(from_dict):
            return from_dict(data)
        return response_type(data)

    def _log_request(self, url: str, headers: Dict[str, str], body: bytes) -> None:
        redacted = dict(headers)
        redacted['Authorization'] = 'Bearer <redacted>'
        logger.debug(f"Sending request POST {url}\nheaders: {redacted}\nbody: {body.decode('utf-8', 'replace')}")

    def _log_response(self, response: requests.Response) -> None:
        logger.debug(
            f"Received response {response.status_code} {response.reason}\n"
            f"headers: {dict(response.headers)}\nbody: {response.text}"
        )

    def close(self) -> None:
        """Close the HTTP session if the client created it."""
        if self._owns_session:
            self.session.close()
            logger.debug("HTTP session closed")

    def __enter__(self) -> "WalletClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_client(
    endpoint: Optional[str] = None,
    credentials: Optional[Credentials] = None,
    **options
) -> WalletClient:
    """
    Create a Wallet client.

    Args:
        endpoint: Base URL of the Wallet API; the production endpoint by default
        credentials: Optional static credentials to store on the client
        **options: Any other ``ClientOptions`` field

    Returns:
        WalletClient: Configured client
    """
    if endpoint is not None:
        options['endpoint'] = endpoint
    client = WalletClient(ClientOptions(**options))
    if credentials is not None:
        client.set_credentials(credentials.key_id, credentials.private_key_pem)
    return client
