"""Exception hierarchy for kubecore.

Every failure raised by the resolver or the resource client derives from
:class:`KubeCoreError` and carries the identifiers needed to act on it
(which context, user, resource kind or object name was involved).
"""

from __future__ import annotations


class KubeCoreError(Exception):
    """Base exception for all kubecore errors."""


class ParseError(KubeCoreError):
    """A kubeconfig document or manifest could not be read or is malformed."""


class NotFoundError(KubeCoreError):
    """A named context, cluster, user or resource does not exist.

    Attributes:
        what: Category of the missing thing (``"context"``, ``"cluster"``,
              ``"user"``, or a resource plural such as ``"pods"``).
        name: The name that was looked up.
    """

    def __init__(self, what: str, name: str) -> None:
        self.what = what
        self.name = name
        super().__init__(f"{what} not found: {name!r}")


class UnsupportedAuthError(KubeCoreError):
    """A kubeconfig user entry has no credential material kubecore understands."""

    def __init__(self, user: str, detail: str = "no token or client certificate configured") -> None:
        self.user = user
        super().__init__(f"unsupported auth for user {user!r}: {detail}")


class UnsupportedOperationError(KubeCoreError):
    """An operation was attempted against a resource kind lacking that capability."""

    def __init__(self, operation: str, resource: str) -> None:
        self.operation = operation
        self.resource = resource
        super().__init__(f"{operation} is not supported by {resource}")


class ConflictError(KubeCoreError):
    """The server rejected an update because the resourceVersion is stale."""

    def __init__(self, resource: str, name: str) -> None:
        self.resource = resource
        self.name = name
        super().__init__(f"conflict updating {resource}/{name}: object has been modified")


class TransportError(KubeCoreError):
    """Opaque failure reported by the transport (connectivity or server rejection).

    Attributes:
        status_code: HTTP status code, or ``None`` when no response was received.
        body:        Decoded response body (usually a ``Status`` document), if any.
    """

    def __init__(self, message: str, status_code: int | None = None, body: object | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)
