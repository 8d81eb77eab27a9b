"""Resolved connection descriptor: where to talk and how to authenticate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kubecore.models.kubeconfig import KubeConfigDocument

DEFAULT_NAMESPACE = "default"


@dataclass(frozen=True)
class BearerToken:
    token: str

    def __repr__(self) -> str:
        return "BearerToken(token=<redacted>)"


@dataclass(frozen=True)
class ClientCertificate:
    """Paths to a PEM client certificate and its private key, used for mutual TLS."""

    cert_file: str
    key_file: str


AuthMaterial = BearerToken | ClientCertificate


@dataclass
class Connection:
    """A resolved cluster endpoint plus exactly one kind of auth material.

    Connections are shared by every ResourceClient built from them. Switching
    context (:func:`kubecore.kubeconfig.resolver.switch_context`) rewrites the
    fields in place, so callers must not switch while requests using this
    connection are in flight.

    Attributes:
        server:    API server URL, or ``None`` when the caller supplies it later.
        auth:      Either a :class:`BearerToken` or a :class:`ClientCertificate`.
        context:   Name of the active kubeconfig context, if any.
        namespace: Default namespace for named operations on namespaced kinds.
        verify:    TLS verification: ``True``, ``False`` or a CA bundle path.
        cluster:   Name of the kubeconfig cluster entry in use, if any.
        user:      Name of the kubeconfig user entry in use, if any.
        document:  The kubeconfig the connection was resolved from, kept so the
                   context can be switched.
        credential_files: Files persisted from embedded ``*-data`` fields for
                   this resolution; removed when the context is switched.
    """

    server: str | None
    auth: AuthMaterial
    context: str | None = None
    namespace: str = DEFAULT_NAMESPACE
    verify: bool | str = True
    cluster: str | None = None
    user: str | None = None
    document: KubeConfigDocument | None = field(default=None, repr=False, compare=False)
    credential_files: tuple[str, ...] = field(default=(), repr=False, compare=False)

    @property
    def token(self) -> str | None:
        return self.auth.token if isinstance(self.auth, BearerToken) else None

    @property
    def cert_file(self) -> str | None:
        return self.auth.cert_file if isinstance(self.auth, ClientCertificate) else None

    @property
    def key_file(self) -> str | None:
        return self.auth.key_file if isinstance(self.auth, ClientCertificate) else None

    def headers(self) -> dict[str, str]:
        """Return the HTTP headers required to authenticate requests."""
        if isinstance(self.auth, BearerToken):
            return {"Authorization": f"Bearer {self.auth.token}"}
        return {}

    def client_cert(self) -> tuple[str, str] | None:
        """Return ``(cert_file, key_file)`` for mutual TLS, or ``None`` for token auth."""
        if isinstance(self.auth, ClientCertificate):
            return (self.auth.cert_file, self.auth.key_file)
        return None
