"""Call-shape variants for ``ResourceClient.get`` and options for ``logs``.

``get`` accepts exactly one of:

* ``None`` or :class:`Everything` - every object in scope;
* :class:`Selector` - objects matching label/field selectors;
* :class:`Name` - one object by name.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Everything:
    """Select every object visible to the client."""


@dataclass(frozen=True)
class Selector:
    """Filter a collection with label and/or field selectors.

    Example::

        pods.get(Selector(label_selector="k8s-app=kube-dns"))
    """

    label_selector: str | None = None
    field_selector: str | None = None
    limit: int | None = None

    def params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.label_selector:
            params["labelSelector"] = self.label_selector
        if self.field_selector:
            params["fieldSelector"] = self.field_selector
        if self.limit is not None:
            params["limit"] = str(self.limit)
        return params


@dataclass(frozen=True)
class Name:
    """Address a single object by name."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Name must not be empty")


GetTarget = Everything | Selector | Name


@dataclass(frozen=True)
class LogOptions:
    """Query options for log retrieval.

    Attributes:
        container:     Container to read from; required for multi-container pods.
        tail_lines:    Only return this many trailing lines.
        follow:        Stream the log instead of returning a snapshot.
        timestamps:    Prefix each line with an RFC3339 timestamp.
        since_seconds: Only return lines newer than this many seconds.
        previous:      Read the previous terminated container instance.
    """

    container: str | None = None
    tail_lines: int | None = None
    follow: bool = False
    timestamps: bool = False
    since_seconds: int | None = None
    previous: bool = False

    def params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.container:
            params["container"] = self.container
        if self.tail_lines is not None:
            params["tailLines"] = str(self.tail_lines)
        if self.follow:
            params["follow"] = "true"
        if self.timestamps:
            params["timestamps"] = "true"
        if self.since_seconds is not None:
            params["sinceSeconds"] = str(self.since_seconds)
        if self.previous:
            params["previous"] = "true"
        return params
