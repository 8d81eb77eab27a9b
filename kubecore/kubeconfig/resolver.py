"""Turning kubeconfig contexts into authenticated :class:`Connection` objects.

Resolution order for a context:

1. look up the context, then its cluster and user entries;
2. derive auth material: ``token`` first, then ``client-certificate`` +
   ``client-key`` file paths, then ``client-certificate-data`` +
   ``client-key-data`` (decoded and persisted through a
   :class:`~kubecore.kubeconfig.credentials.CredentialStore`);
3. take the server endpoint and TLS verification settings from the cluster.
"""

from __future__ import annotations

import os
from pathlib import Path

from kubecore.errors import KubeCoreError, NotFoundError, ParseError, UnsupportedAuthError
from kubecore.kubeconfig.credentials import CredentialStore, default_store
from kubecore.kubeconfig.loader import load
from kubecore.models.connection import (
    DEFAULT_NAMESPACE,
    AuthMaterial,
    BearerToken,
    ClientCertificate,
    Connection,
)
from kubecore.models.kubeconfig import ClusterInfo, KubeConfigDocument, UserInfo
from kubecore.observability.logging import get_logger

_log = get_logger("kubeconfig.resolver")

SERVICE_ACCOUNT_DIR = Path("/var/run/secrets/kubernetes.io/serviceaccount")


def _resolve_auth(user_name: str, user: UserInfo, store: CredentialStore, persisted: list[str]) -> AuthMaterial:
    if user.token:
        return BearerToken(user.token)

    if user.client_certificate or user.client_key:
        if not (user.client_certificate and user.client_key):
            raise UnsupportedAuthError(user_name, "client-certificate and client-key must be set together")
        return ClientCertificate(cert_file=user.client_certificate, key_file=user.client_key)

    if user.client_certificate_data or user.client_key_data:
        if not (user.client_certificate_data and user.client_key_data):
            raise UnsupportedAuthError(
                user_name, "client-certificate-data and client-key-data must be set together"
            )
        cert_file = store.write_b64(
            user.client_certificate_data, label="client-cert", field_name="client-certificate-data"
        )
        persisted.append(cert_file)
        key_file = store.write_b64(user.client_key_data, label="client-key", field_name="client-key-data")
        persisted.append(key_file)
        return ClientCertificate(cert_file=cert_file, key_file=key_file)

    raise UnsupportedAuthError(user_name)


def _resolve_verify(cluster: ClusterInfo, store: CredentialStore, persisted: list[str]) -> bool | str:
    if cluster.insecure_skip_tls_verify:
        return False
    if cluster.certificate_authority:
        return cluster.certificate_authority
    if cluster.certificate_authority_data:
        ca_file = store.write_b64(
            cluster.certificate_authority_data, label="ca", field_name="certificate-authority-data"
        )
        persisted.append(ca_file)
        return ca_file
    return True


def _resolve_fields(
    document: KubeConfigDocument,
    context_name: str | None,
    store: CredentialStore,
) -> dict[str, object]:
    name = context_name or document.current_context
    if not name:
        raise ParseError("kubeconfig has no current-context and no context was requested")

    context = document.find_context(name)
    if context is None:
        raise NotFoundError("context", name)
    cluster = document.find_cluster(context.cluster)
    if cluster is None:
        raise NotFoundError("cluster", context.cluster)
    user = document.find_user(context.user)
    if user is None:
        raise NotFoundError("user", context.user)

    persisted: list[str] = []
    try:
        auth = _resolve_auth(context.user, user, store, persisted)
        verify = _resolve_verify(cluster, store, persisted)
    except (KubeCoreError, OSError):
        store.discard(persisted)
        raise
    _log.info(
        "context_resolved",
        context=name,
        cluster=context.cluster,
        user=context.user,
        auth="token" if isinstance(auth, BearerToken) else "client-certificate",
    )
    return {
        "server": cluster.server,
        "auth": auth,
        "context": name,
        "namespace": context.namespace or DEFAULT_NAMESPACE,
        "verify": verify,
        "cluster": context.cluster,
        "user": context.user,
        "credential_files": tuple(persisted),
    }


def resolve(
    document: KubeConfigDocument,
    context_name: str | None = None,
    *,
    store: CredentialStore | None = None,
) -> Connection:
    """Resolve *context_name* (default: the document's current-context).

    Raises:
        NotFoundError: the context, or the cluster/user it references, is missing.
        UnsupportedAuthError: the user entry carries no usable credential.
        ParseError: embedded credential data is not valid base64.
    """
    fields = _resolve_fields(document, context_name, store or default_store())
    return Connection(document=document, **fields)  # type: ignore[arg-type]


def switch_context(
    connection: Connection,
    new_context: str,
    *,
    store: CredentialStore | None = None,
) -> Connection:
    """Re-resolve *connection* against *new_context*, mutating it in place.

    The connection is left untouched when resolution fails. Credential files
    persisted for the previous context are removed once the switch succeeds.
    Must not be called while other threads issue requests through the same
    connection.
    """
    if connection.document is None:
        raise ParseError("connection was not resolved from a kubeconfig; cannot switch context")
    store = store or default_store()
    previous = connection.context
    stale = connection.credential_files
    fields = _resolve_fields(connection.document, new_context, store)
    for key, value in fields.items():
        setattr(connection, key, value)
    store.discard(stale)
    _log.info("context_switched", previous=previous, context=new_context)
    return connection


def from_kube_config(path: str | os.PathLike[str] | None = None, context: str | None = None) -> Connection:
    """Load the kubeconfig at *path* and resolve *context* (default: current-context)."""
    return resolve(load(path), context)


def from_token(token: str, server: str | None = None) -> Connection:
    """Build a bearer-token connection, e.g. from a static or bootstrap token.

    The endpoint may be omitted and assigned to ``connection.server`` later.
    """
    if not token:
        raise UnsupportedAuthError("<token>", "empty bearer token")
    return Connection(server=server, auth=BearerToken(token))


def in_cluster_config(service_account_dir: str | os.PathLike[str] = SERVICE_ACCOUNT_DIR) -> Connection:
    """Build a connection from the service account mounted into a pod.

    The server is derived from ``KUBERNETES_SERVICE_HOST`` and
    ``KUBERNETES_SERVICE_PORT`` when both are set. The mounted ``ca.crt`` and
    ``namespace`` files are used when present.

    Raises:
        NotFoundError: the token file cannot be read (not running in a pod).
    """
    sa_dir = Path(service_account_dir)
    token_path = sa_dir / "token"
    try:
        token = token_path.read_text(encoding="utf-8").strip()
    except OSError as err:
        raise NotFoundError("service account token", str(token_path)) from err
    if not token:
        raise NotFoundError("service account token", str(token_path))

    host = os.environ.get("KUBERNETES_SERVICE_HOST", "")
    port = os.environ.get("KUBERNETES_SERVICE_PORT", "")
    server: str | None = None
    if host and port:
        # IPv6 service hosts need brackets in a URL
        server = f"https://[{host}]:{port}" if ":" in host else f"https://{host}:{port}"

    ca_path = sa_dir / "ca.crt"
    namespace_path = sa_dir / "namespace"
    namespace = DEFAULT_NAMESPACE
    if namespace_path.is_file():
        namespace = namespace_path.read_text(encoding="utf-8").strip() or DEFAULT_NAMESPACE

    connection = Connection(
        server=server,
        auth=BearerToken(token),
        namespace=namespace,
        verify=str(ca_path) if ca_path.is_file() else True,
    )
    _log.info("in_cluster_config_loaded", server=server, namespace=namespace)
    return connection
