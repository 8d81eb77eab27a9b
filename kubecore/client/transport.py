"""HTTP exchange with the API server.

The resource client only depends on the :class:`Transport` protocol. The
default :class:`HttpxTransport` opens a short-lived ``httpx.Client`` per
request and reads the connection's server, auth and TLS settings at request
time, so a context switch is picked up by the next call. It does not retry.
"""

from __future__ import annotations

import json
import ssl
import time
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from kubecore.errors import TransportError
from kubecore.models.connection import Connection
from kubecore.observability.logging import get_logger
from kubecore.observability.metrics import api_request_duration_seconds, api_requests_total

_log = get_logger("client.transport")

JSON = "application/json"
MERGE_PATCH = "application/merge-patch+json"


@dataclass(frozen=True)
class ApiRequest:
    """One logical API call.

    Attributes:
        method:   HTTP verb.
        path:     Absolute API path, e.g. ``/api/v1/namespaces/demo/pods``.
        resource: Resource plural, used for metrics and log context only.
        params:   Query parameters.
        body:     JSON-serialisable request body.
        content_type: Content type of *body*.
        expect_json:  Decode the response as JSON; otherwise return text.
    """

    method: str
    path: str
    resource: str = ""
    params: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    content_type: str = JSON
    expect_json: bool = True


class Transport(Protocol):
    def send(self, connection: Connection, request: ApiRequest) -> Any:
        """Perform *request* and return the decoded JSON object, or text when ``expect_json`` is false."""
        ...

    def stream(self, connection: Connection, request: ApiRequest) -> Iterator[str]:
        """Perform *request* and lazily yield response text line by line."""
        ...


def _ssl_context(connection: Connection) -> ssl.SSLContext:
    if connection.verify is False:
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    elif isinstance(connection.verify, str):
        ctx = ssl.create_default_context(cafile=connection.verify)
    else:
        ctx = ssl.create_default_context()
    client_cert = connection.client_cert()
    if client_cert is not None:
        ctx.load_cert_chain(certfile=client_cert[0], keyfile=client_cert[1])
    return ctx


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _error_from_response(request: ApiRequest, response: httpx.Response) -> TransportError:
    body = _decode_body(response)
    detail = ""
    if isinstance(body, dict):
        detail = str(body.get("message") or body.get("reason") or "")
    elif isinstance(body, str):
        detail = body[:200]
    message = f"{request.method} {request.path} failed with HTTP {response.status_code}"
    if detail:
        message = f"{message}: {detail}"
    return TransportError(message, status_code=response.status_code, body=body)


class HttpxTransport:
    """Default transport built on ``httpx``.

    Args:
        timeout:   Request timeout in seconds. Defaults to
                   ``KUBECORE_REQUEST_TIMEOUT`` (30 s).
        transport: Optional ``httpx`` transport, e.g. ``httpx.MockTransport``
                   in tests. When given, TLS settings are left to it.
    """

    def __init__(self, timeout: float | None = None, transport: httpx.BaseTransport | None = None) -> None:
        if timeout is None:
            from kubecore.config import load_config

            timeout = load_config().transport.timeout_seconds
        self._timeout = timeout
        self._transport = transport

    def _client(self, connection: Connection) -> httpx.Client:
        if not connection.server:
            raise TransportError("no API server endpoint configured for this connection")
        headers = {"Accept": JSON, **connection.headers()}
        kwargs: dict[str, Any] = {}
        if self._transport is not None:
            kwargs["transport"] = self._transport
        else:
            try:
                kwargs["verify"] = _ssl_context(connection)
            except (OSError, ssl.SSLError) as err:
                raise TransportError(f"cannot load TLS material for {connection.server}: {err}") from err
        return httpx.Client(base_url=connection.server, headers=headers, timeout=self._timeout, **kwargs)

    def _build(self, client: httpx.Client, request: ApiRequest) -> httpx.Request:
        content: bytes | None = None
        headers: dict[str, str] = {}
        if request.body is not None:
            content = json.dumps(request.body).encode("utf-8")
            headers["Content-Type"] = request.content_type
        if not request.expect_json:
            headers["Accept"] = "*/*"
        return client.build_request(
            request.method,
            request.path,
            params=dict(request.params),
            content=content,
            headers=headers,
        )

    def _observe(self, request: ApiRequest, code: str, started: float) -> None:
        elapsed = time.monotonic() - started
        api_requests_total.labels(method=request.method, resource=request.resource, code=code).inc()
        api_request_duration_seconds.labels(method=request.method, resource=request.resource).observe(elapsed)
        _log.debug(
            "api_request",
            method=request.method,
            path=request.path,
            code=code,
            duration_ms=round(elapsed * 1000, 1),
        )

    def send(self, connection: Connection, request: ApiRequest) -> Any:
        started = time.monotonic()
        try:
            with self._client(connection) as client:
                response = client.send(self._build(client, request))
        except httpx.TimeoutException as err:
            self._observe(request, "timeout", started)
            raise TransportError(f"{request.method} {request.path} timed out") from err
        except httpx.HTTPError as err:
            self._observe(request, "error", started)
            _log.warning("api_request_failed", method=request.method, path=request.path, error=str(err))
            raise TransportError(f"{request.method} {request.path} failed: {err}") from err

        self._observe(request, str(response.status_code), started)
        if response.is_error:
            raise _error_from_response(request, response)
        if not request.expect_json:
            return response.text
        if not response.content:
            return None
        body = _decode_body(response)
        if not isinstance(body, dict):
            raise TransportError(
                f"{request.method} {request.path} returned HTTP {response.status_code} without a JSON object body",
                status_code=response.status_code,
                body=body,
            )
        return body

    def stream(self, connection: Connection, request: ApiRequest) -> Iterator[str]:
        started = time.monotonic()
        try:
            with self._client(connection) as client:
                response = client.send(self._build(client, request), stream=True)
                try:
                    self._observe(request, str(response.status_code), started)
                    if response.is_error:
                        response.read()
                        raise _error_from_response(request, response)
                    yield from response.iter_lines()
                finally:
                    response.close()
        except httpx.TimeoutException as err:
            raise TransportError(f"{request.method} {request.path} timed out") from err
        except httpx.HTTPError as err:
            _log.warning("api_stream_failed", method=request.method, path=request.path, error=str(err))
            raise TransportError(f"{request.method} {request.path} failed: {err}") from err
