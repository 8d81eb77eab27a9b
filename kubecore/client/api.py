"""Entry point tying a connection to per-kind resource clients.

Example::

    client = Client.from_kube_config(context="dev")
    core = client.core_v1()
    namespaces = core.namespaces().get()
    dns = core.services("kube-system").get(Name("kube-dns"))
    jobs = client.batch_v1().jobs("kube-system")
"""

from __future__ import annotations

import os
from collections.abc import Callable

from kubecore.client.resource_client import ResourceClient
from kubecore.client.transport import HttpxTransport, Transport
from kubecore.errors import NotFoundError
from kubecore.kubeconfig.resolver import from_kube_config, in_cluster_config
from kubecore.models.connection import Connection
from kubecore.models.resources import ResourceDescriptor
from kubecore.resources import descriptors_for, get_descriptor


class ApiGroup:
    """Resource clients for the built-in kinds served under one group/version.

    Each registered plural is reachable as a method taking an optional
    namespace, e.g. ``group.pods("demo")`` or ``group.nodes()``.
    """

    def __init__(self, client: Client, group: str, version: str = "v1") -> None:
        self._client = client
        self._group = group
        self._version = version
        self._descriptors = {d.plural: d for d in descriptors_for(group, version)}

    def __repr__(self) -> str:
        label = f"{self._group}/{self._version}" if self._group else self._version
        return f"<ApiGroup {label} kinds={sorted(self._descriptors)}>"

    @property
    def plurals(self) -> list[str]:
        return sorted(self._descriptors)

    def resource(self, plural: str, namespace: str | None = None) -> ResourceClient:
        """Return a client for *plural*, optionally bound to *namespace*.

        Raises:
            NotFoundError: the kind is not served by this group.
            UnsupportedOperationError: *namespace* given for a cluster-scoped kind.
        """
        descriptor = self._descriptors.get(plural)
        if descriptor is None:
            qualified = f"{plural}.{self._group}" if self._group else plural
            raise NotFoundError("resource kind", qualified)
        return self._client.resource(descriptor, namespace)

    def __getattr__(self, plural: str) -> Callable[..., ResourceClient]:
        if plural.startswith("_") or plural not in self._descriptors:
            raise AttributeError(f"{type(self).__name__} has no resource {plural!r}")

        def accessor(namespace: str | None = None) -> ResourceClient:
            return self.resource(plural, namespace)

        accessor.__name__ = plural
        return accessor


class Client:
    """Factory for resource clients sharing one connection and transport."""

    def __init__(self, connection: Connection, transport: Transport | None = None) -> None:
        self._connection = connection
        self._transport: Transport = transport if transport is not None else HttpxTransport()

    @classmethod
    def from_kube_config(
        cls,
        path: str | os.PathLike[str] | None = None,
        context: str | None = None,
        transport: Transport | None = None,
    ) -> Client:
        return cls(from_kube_config(path, context), transport)

    @classmethod
    def in_cluster(cls, transport: Transport | None = None) -> Client:
        return cls(in_cluster_config(), transport)

    @property
    def connection(self) -> Connection:
        return self._connection

    def resource(self, descriptor: ResourceDescriptor | str, namespace: str | None = None) -> ResourceClient:
        """Return a client for *descriptor* (or a core-group plural name)."""
        if isinstance(descriptor, str):
            descriptor = get_descriptor(descriptor)
        client = ResourceClient(self._connection, descriptor, transport=self._transport)
        return client.namespace(namespace) if namespace is not None else client

    def core_v1(self) -> ApiGroup:
        return ApiGroup(self, "")

    def apps_v1(self) -> ApiGroup:
        return ApiGroup(self, "apps")

    def batch_v1(self) -> ApiGroup:
        return ApiGroup(self, "batch")

    def networking_v1(self) -> ApiGroup:
        return ApiGroup(self, "networking.k8s.io")

    def rbac_v1(self) -> ApiGroup:
        return ApiGroup(self, "rbac.authorization.k8s.io")
