"""Static per-kind metadata that drives the generic resource client."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True)
class ResourceDescriptor:
    """Describes one REST resource kind and its capabilities.

    Instances are immutable and shared by every client of that kind. The
    capability flags are the only source of truth for which verbs a client
    accepts, so callers can inspect them before attempting a call.

    Attributes:
        plural:        URL segment, e.g. ``"pods"``.
        kind:          Object kind, e.g. ``"Pod"``.
        group:         API group; empty string for the core group.
        version:       API version within the group, e.g. ``"v1"``.
        namespaced:    True if objects live inside a namespace.
        has_status:    True if the kind exposes a ``/status`` subresource.
        supports_logs: True if the kind exposes a ``/log`` subresource.
    """

    plural: str
    kind: str
    group: str = ""
    version: str = "v1"
    namespaced: bool = True
    has_status: bool = False
    supports_logs: bool = False

    @property
    def api_version(self) -> str:
        """``apiVersion`` value for objects of this kind (``v1`` or ``group/version``)."""
        return f"{self.group}/{self.version}" if self.group else self.version

    @property
    def list_kind(self) -> str:
        return f"{self.kind}List"

    @property
    def api_prefix(self) -> str:
        if self.group:
            return f"/apis/{self.group}/{self.version}"
        return f"/api/{self.version}"

    def path(
        self,
        namespace: str | None = None,
        name: str | None = None,
        subresource: str | None = None,
    ) -> str:
        """Build the REST path for a collection, an object or an object subresource.

        ``namespace`` is ignored for cluster-scoped kinds and may be ``None``
        for namespaced kinds to address the collection across all namespaces.
        """
        parts = [self.api_prefix]
        if self.namespaced and namespace:
            parts.append(f"namespaces/{quote(namespace, safe='')}")
        parts.append(self.plural)
        if name is not None:
            parts.append(quote(name, safe=""))
            if subresource:
                parts.append(subresource)
        return "/".join(parts)

    def __str__(self) -> str:
        return f"{self.plural}.{self.group}" if self.group else self.plural
