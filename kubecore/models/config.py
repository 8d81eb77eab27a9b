"""Runtime settings for kubecore, populated from KUBECORE_* environment variables."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LogConfig:
    level: str = "info"


@dataclass(frozen=True)
class TransportConfig:
    """HTTP transport settings.

    Attributes:
        timeout_seconds: Per-request timeout handed to httpx (1-300).
    """

    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class CredentialsConfig:
    """Where decoded client certificates and keys are written.

    Attributes:
        base_dir: Parent directory for the per-process credentials directory.
                  Empty means the system temporary directory.
    """

    base_dir: str = ""


@dataclass(frozen=True)
class KubeCoreConfig:
    kubeconfig: str = ""
    log: LogConfig = field(default_factory=LogConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
