"""Generic, descriptor-driven client for one resource kind.

One :class:`ResourceClient` class serves every kind: the REST paths, the
namespace handling and the set of permitted verbs all come from the
:class:`~kubecore.models.resources.ResourceDescriptor` it is built with.
Capability checks run before any request is issued.

Usage::

    pods = ResourceClient(connection, PODS).namespace("kube-system")
    for pod in pods.get(Selector(label_selector="k8s-app=kube-dns")):
        print(pod.name(), pods.status(pod.name())["phase"])
"""

from __future__ import annotations

import builtins
from collections.abc import Iterator, Mapping
from typing import Any, overload

import yaml

from kubecore.client.targets import Everything, GetTarget, LogOptions, Name, Selector
from kubecore.client.transport import MERGE_PATCH, ApiRequest, HttpxTransport, Transport
from kubecore.errors import (
    ConflictError,
    NotFoundError,
    ParseError,
    TransportError,
    UnsupportedOperationError,
)
from kubecore.models.connection import Connection
from kubecore.models.objects import ListResult, ResourceObject, StatusResult
from kubecore.models.resources import ResourceDescriptor
from kubecore.observability.logging import get_logger

_log = get_logger("client.resource")

Manifest = Mapping[str, Any] | ResourceObject | str


class ResourceClient:
    """Client for one resource kind over one connection.

    Args:
        connection: Resolved connection, shared with other clients.
        descriptor: Metadata of the resource kind.
        namespace:  Namespace to bind to. Only valid for namespaced kinds;
                    prefer :meth:`namespace` to bind after construction.
        transport:  HTTP transport; defaults to :class:`HttpxTransport`.

    Namespace scoping: collection reads on an unbound client of a namespaced
    kind span all namespaces. Named operations use the bound namespace, then
    (for ``create``/``update``) the object's ``metadata.namespace``, then the
    connection's default namespace.
    """

    def __init__(
        self,
        connection: Connection,
        descriptor: ResourceDescriptor,
        namespace: str | None = None,
        transport: Transport | None = None,
    ) -> None:
        if namespace is not None and not descriptor.namespaced:
            raise UnsupportedOperationError("namespace binding", str(descriptor))
        self._connection = connection
        self._descriptor = descriptor
        self._namespace = namespace
        self._transport: Transport = transport if transport is not None else HttpxTransport()

    def __repr__(self) -> str:
        return f"<ResourceClient {self._descriptor} namespace={self._namespace!r}>"

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def descriptor(self) -> ResourceDescriptor:
        return self._descriptor

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def namespace_name(self) -> str | None:
        """The bound namespace, or ``None`` when unbound."""
        return self._namespace

    @property
    def supports_status(self) -> bool:
        return self._descriptor.has_status

    @property
    def supports_logs(self) -> bool:
        return self._descriptor.supports_logs

    def namespace(self, namespace: str) -> ResourceClient:
        """Return a client bound to *namespace*.

        Raises:
            UnsupportedOperationError: the kind is cluster-scoped.
        """
        if not self._descriptor.namespaced:
            raise UnsupportedOperationError("namespace binding", str(self._descriptor))
        if not namespace:
            raise ValueError("namespace must not be empty")
        return ResourceClient(self._connection, self._descriptor, namespace, self._transport)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _target_namespace(self, obj: Mapping[str, Any] | None = None) -> str | None:
        if not self._descriptor.namespaced:
            return None
        if self._namespace:
            return self._namespace
        if obj is not None:
            meta = obj.get("metadata") or {}
            if meta.get("namespace"):
                return str(meta["namespace"])
        return self._connection.namespace

    def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        request = ApiRequest(method=method, path=path, resource=self._descriptor.plural, **kwargs)
        return self._transport.send(self._connection, request)

    def _send_named(self, name: str, method: str, path: str, **kwargs: Any) -> Any:
        try:
            return self._send(method, path, **kwargs)
        except TransportError as err:
            if err.status_code == 404:
                raise NotFoundError(self._descriptor.plural, name) from err
            raise

    def _wrap(self, raw: Mapping[str, Any]) -> ResourceObject:
        return ResourceObject(raw, self._descriptor)

    def _require_status(self, operation: str) -> None:
        if not self._descriptor.has_status:
            raise UnsupportedOperationError(operation, str(self._descriptor))

    def _collection(self, params: Mapping[str, str]) -> ListResult:
        raw = self._send("GET", self._descriptor.path(self._namespace), params=params)
        return ListResult.from_dict(raw or {}, self._descriptor)

    def _object_path(self, name: str, namespace: str | None, subresource: str | None = None) -> str:
        if not name:
            raise ValueError(f"{self._descriptor.plural}: object name must not be empty")
        return self._descriptor.path(namespace, name, subresource)

    def _as_document(self, obj: Manifest) -> dict[str, Any]:
        if isinstance(obj, ResourceObject):
            document = obj.to_dict()
        elif isinstance(obj, str):
            try:
                parsed = yaml.safe_load(obj)
            except yaml.YAMLError as err:
                raise ParseError(f"invalid {self._descriptor.kind} manifest: {err}") from err
            if not isinstance(parsed, dict):
                raise ParseError(f"{self._descriptor.kind} manifest must be a mapping")
            document = parsed
        else:
            document = dict(obj)
        document.setdefault("apiVersion", self._descriptor.api_version)
        document.setdefault("kind", self._descriptor.kind)
        return document

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @overload
    def get(self, target: Name) -> ResourceObject: ...

    @overload
    def get(self, target: Everything | Selector | None = None) -> builtins.list[ResourceObject]: ...

    def get(self, target: GetTarget | None = None) -> builtins.list[ResourceObject] | ResourceObject:
        """Fetch objects according to the shape of *target*.

        * ``None`` / :class:`Everything` - all objects in scope, wrapped;
        * :class:`Selector` - matching objects, wrapped;
        * :class:`Name` - the single named object.

        Raises:
            NotFoundError: a named object does not exist.
            TypeError: *target* is not one of the variants above.
        """
        match target:
            case None | Everything():
                return [self._wrap(item) for item in self._collection({}).items]
            case Selector():
                return [self._wrap(item) for item in self._collection(target.params()).items]
            case Name(value=name):
                path = self._object_path(name, self._target_namespace())
                return self._wrap(self._send_named(name, "GET", path))
            case _:
                raise TypeError(
                    f"get() expects None, Everything, Selector or Name, got {type(target).__name__}"
                )

    def list(self, selector: Selector | None = None) -> ListResult:
        """Return the raw list document (``kind``, ``apiVersion``, ``items``)."""
        return self._collection(selector.params() if selector is not None else {})

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, obj: Manifest) -> ResourceObject:
        """Create an object from a mapping, a ResourceObject or manifest text."""
        document = self._as_document(obj)
        path = self._descriptor.path(self._target_namespace(document))
        created = self._wrap(self._send("POST", path, body=document) or {})
        _log.info("resource_created", resource=self._descriptor.plural, name=created.name())
        return created

    def update(self, obj: ResourceObject | Mapping[str, Any]) -> ResourceObject:
        """Replace the stored object with *obj*.

        The object's ``metadata.resourceVersion`` is sent as-is: when present
        the server rejects stale versions, when absent the write is
        unconditional.

        Raises:
            ConflictError: the resourceVersion is stale.
            NotFoundError: the object does not exist.
        """
        document = self._as_document(obj)
        name = (document.get("metadata") or {}).get("name") or ""
        path = self._object_path(name, self._target_namespace(document))
        try:
            updated = self._send_named(name, "PUT", path, body=document)
        except TransportError as err:
            if err.status_code == 409:
                raise ConflictError(self._descriptor.plural, name) from err
            raise
        return self._wrap(updated)

    def patch(self, name: str, partial: Mapping[str, Any]) -> ResourceObject:
        """Merge-patch *partial* into the named object; absent fields are untouched."""
        path = self._object_path(name, self._target_namespace())
        return self._wrap(self._send_named(name, "PATCH", path, body=dict(partial), content_type=MERGE_PATCH))

    def delete(
        self,
        name: str,
        *,
        propagation_policy: str | None = None,
        grace_period_seconds: int | None = None,
    ) -> StatusResult:
        """Delete the named object.

        Kinds with finalizers (e.g. namespaces) are not removed synchronously;
        the returned :class:`StatusResult` then embeds the object in its
        current phase.
        """
        body: dict[str, Any] | None = None
        if propagation_policy is not None or grace_period_seconds is not None:
            body = {"apiVersion": "v1", "kind": "DeleteOptions"}
            if propagation_policy is not None:
                body["propagationPolicy"] = propagation_policy
            if grace_period_seconds is not None:
                body["gracePeriodSeconds"] = grace_period_seconds
        path = self._object_path(name, self._target_namespace())
        raw = self._send_named(name, "DELETE", path, body=body)
        _log.info("resource_deleted", resource=self._descriptor.plural, name=name)
        return StatusResult.from_response(raw or {}, self._descriptor)

    # ------------------------------------------------------------------
    # Status subresource
    # ------------------------------------------------------------------

    def status(self, name: str) -> dict[str, Any]:
        """Return the ``status`` sub-document of the named object.

        Raises:
            UnsupportedOperationError: the kind has no status subresource.
        """
        self._require_status("status")
        path = self._object_path(name, self._target_namespace(), "status")
        raw = self._send_named(name, "GET", path)
        return dict((raw or {}).get("status") or {})

    def patch_status(self, name: str, partial: Mapping[str, Any]) -> ResourceObject:
        """Merge-patch the status subresource of the named object."""
        self._require_status("patch_status")
        path = self._object_path(name, self._target_namespace(), "status")
        return self._wrap(self._send_named(name, "PATCH", path, body=dict(partial), content_type=MERGE_PATCH))

    def update_status(self, obj: ResourceObject | Mapping[str, Any]) -> ResourceObject:
        """Replace the status subresource with the status of *obj*."""
        self._require_status("update_status")
        document = self._as_document(obj)
        name = (document.get("metadata") or {}).get("name") or ""
        path = self._object_path(name, self._target_namespace(document), "status")
        try:
            updated = self._send_named(name, "PUT", path, body=document)
        except TransportError as err:
            if err.status_code == 409:
                raise ConflictError(self._descriptor.plural, name) from err
            raise
        return self._wrap(updated)

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    def logs(self, name: str, options: LogOptions | None = None) -> str | Iterator[str]:
        """Read the log of the named object.

        Without ``options.follow`` the full log text as of the call is
        returned. With it, a lazy iterator of lines is returned; the stream
        ends when the server closes it, and each call opens a new stream.

        Raises:
            UnsupportedOperationError: the kind does not expose logs. Raised
                immediately, also when following.
        """
        if not self._descriptor.supports_logs:
            raise UnsupportedOperationError("logs", str(self._descriptor))
        options = options or LogOptions()
        path = self._object_path(name, self._target_namespace(), "log")
        if not options.follow:
            return str(self._send_named(name, "GET", path, params=options.params(), expect_json=False) or "")
        request = ApiRequest(
            method="GET",
            path=path,
            resource=self._descriptor.plural,
            params=options.params(),
            expect_json=False,
        )
        return self._follow(name, request)

    def _follow(self, name: str, request: ApiRequest) -> Iterator[str]:
        try:
            yield from self._transport.stream(self._connection, request)
        except TransportError as err:
            if err.status_code == 404:
                raise NotFoundError(self._descriptor.plural, name) from err
            raise
