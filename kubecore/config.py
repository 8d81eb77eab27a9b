"""Environment-driven settings loader.

Reads ``KUBECORE_*`` variables, clamps numeric values into their allowed
ranges and rejects values that cannot be interpreted.
"""

from __future__ import annotations

import os

from kubecore.models.config import CredentialsConfig, KubeCoreConfig, LogConfig, TransportConfig

_VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})

_TIMEOUT_MIN_S = 1.0
_TIMEOUT_MAX_S = 300.0
_TIMEOUT_DEFAULT_S = 30.0


def _env(name: str, default: str = "") -> str:
    return os.environ.get(f"KUBECORE_{name}", default).strip()


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _parse_timeout(raw: str) -> float:
    if not raw:
        return _TIMEOUT_DEFAULT_S
    try:
        value = float(raw)
    except ValueError as err:
        raise ValueError(f"Invalid request timeout: {raw!r}") from err
    return _clamp(value, _TIMEOUT_MIN_S, _TIMEOUT_MAX_S)


def _parse_log_level(raw: str) -> str:
    level = (raw or "info").lower()
    if level not in _VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {raw!r} (expected one of {sorted(_VALID_LOG_LEVELS)})")
    return level


def load_config() -> KubeCoreConfig:
    """Build a :class:`KubeCoreConfig` from the current environment.

    Raises:
        ValueError: if ``KUBECORE_LOG_LEVEL`` or ``KUBECORE_REQUEST_TIMEOUT``
                    cannot be interpreted.
    """
    return KubeCoreConfig(
        kubeconfig=_env("KUBECONFIG"),
        log=LogConfig(level=_parse_log_level(_env("LOG_LEVEL"))),
        transport=TransportConfig(timeout_seconds=_parse_timeout(_env("REQUEST_TIMEOUT"))),
        credentials=CredentialsConfig(base_dir=_env("CREDENTIALS_DIR")),
    )
