"""Wrappers around decoded API documents.

:class:`ResourceObject` is a mutable mapping over one object document;
:class:`ListResult` is the raw result of a list call; :class:`StatusResult`
is what a delete returns.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from kubecore.errors import UnsupportedOperationError
from kubecore.models.resources import ResourceDescriptor


class ResourceObject(MutableMapping[str, Any]):
    """A decoded resource document bound to the descriptor of its kind.

    Top-level fields are reachable with mapping syntax (``pod["spec"]``) and
    nested documents are plain dicts that may be edited in place. Nothing is
    sent to the server until the object is passed to ``update``/``patch`` of
    a resource client.

    Label and annotation getters return copies; use the setters to change
    them on this object.
    """

    def __init__(self, raw: Mapping[str, Any], descriptor: ResourceDescriptor) -> None:
        self._raw: dict[str, Any] = dict(raw)
        self._descriptor = descriptor

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self._raw[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._raw[key] = value

    def __delitem__(self, key: str) -> None:
        del self._raw[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._raw)

    def __len__(self) -> int:
        return len(self._raw)

    def __repr__(self) -> str:
        meta = self._raw.get("metadata") or {}
        return f"<ResourceObject {self._descriptor.kind} {meta.get('namespace') or '-'}/{meta.get('name')}>"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def descriptor(self) -> ResourceDescriptor:
        return self._descriptor

    @property
    def kind(self) -> str:
        return str(self._raw.get("kind") or self._descriptor.kind)

    @property
    def api_version(self) -> str:
        return str(self._raw.get("apiVersion") or self._descriptor.api_version)

    def _metadata(self) -> dict[str, Any]:
        meta = self._raw.get("metadata")
        if not isinstance(meta, dict):
            meta = {}
            self._raw["metadata"] = meta
        return meta

    def name(self) -> str | None:
        return self._metadata().get("name")

    def namespace(self) -> str | None:
        """Return the object's namespace.

        Raises:
            UnsupportedOperationError: the kind is cluster-scoped.
        """
        if not self._descriptor.namespaced:
            raise UnsupportedOperationError("namespace", str(self._descriptor))
        return self._metadata().get("namespace")

    def resource_version(self) -> str | None:
        return self._metadata().get("resourceVersion")

    # ------------------------------------------------------------------
    # Labels / annotations
    # ------------------------------------------------------------------

    def labels(self) -> dict[str, str]:
        return dict(self._metadata().get("labels") or {})

    def set_labels(self, labels: Mapping[str, str]) -> None:
        self._metadata()["labels"] = dict(labels)

    def annotations(self) -> dict[str, str]:
        return dict(self._metadata().get("annotations") or {})

    def set_annotations(self, annotations: Mapping[str, str]) -> None:
        self._metadata()["annotations"] = dict(annotations)

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the underlying document."""
        return copy.deepcopy(self._raw)


@dataclass(frozen=True)
class ListResult:
    """Raw list response, e.g. ``kind="PodList"`` with undecorated item dicts."""

    kind: str
    api_version: str
    items: list[dict[str, Any]] = field(default_factory=list)
    resource_version: str | None = None
    continue_token: str | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], descriptor: ResourceDescriptor) -> ListResult:
        meta = raw.get("metadata") or {}
        return cls(
            kind=str(raw.get("kind") or descriptor.list_kind),
            api_version=str(raw.get("apiVersion") or descriptor.api_version),
            items=list(raw.get("items") or []),
            resource_version=meta.get("resourceVersion"),
            continue_token=meta.get("continue") or None,
        )


class Outcome(StrEnum):
    """``status`` field of an API ``Status`` document."""

    SUCCESS = "Success"
    FAILURE = "Failure"


@dataclass(frozen=True)
class StatusResult:
    """Result of a delete.

    The server answers either with a ``Status`` document (``status`` set) or
    with the object itself when deletion is not immediate, e.g. a namespace
    entering phase ``Terminating`` (``resource`` set, ``status`` is ``None``).
    """

    status: Outcome | None = None
    reason: str | None = None
    message: str | None = None
    code: int | None = None
    resource: ResourceObject | None = None

    def is_failure(self) -> bool:
        return self.status is Outcome.FAILURE

    @classmethod
    def from_response(cls, raw: Mapping[str, Any], descriptor: ResourceDescriptor) -> StatusResult:
        if raw.get("kind") == "Status":
            try:
                outcome: Outcome | None = Outcome(raw.get("status"))
            except ValueError:
                outcome = None
            return cls(
                status=outcome,
                reason=raw.get("reason") or None,
                message=raw.get("message") or None,
                code=raw.get("code"),
            )
        return cls(resource=ResourceObject(raw, descriptor))
