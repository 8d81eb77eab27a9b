"""Reading kubeconfig files into :class:`KubeConfigDocument` models."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from kubecore.errors import ParseError
from kubecore.models.kubeconfig import KubeConfigDocument

_DEFAULT_RELATIVE_PATH = Path(".kube") / "config"


def default_kubeconfig_path() -> Path:
    """Return the kubeconfig path to use when none is given.

    Precedence: ``KUBECORE_KUBECONFIG``, the first entry of ``KUBECONFIG``,
    then ``~/.kube/config``.
    """
    from kubecore.config import load_config

    configured = load_config().kubeconfig
    if configured:
        return Path(configured).expanduser()
    env_value = os.environ.get("KUBECONFIG", "")
    for entry in env_value.split(os.pathsep):
        if entry.strip():
            return Path(entry.strip()).expanduser()
    return Path.home() / _DEFAULT_RELATIVE_PATH


def load_from_string(text: str, source: str = "<string>") -> KubeConfigDocument:
    """Parse kubeconfig YAML text.

    Raises:
        ParseError: if the text is not YAML, not a mapping, or lacks one of
                    the ``contexts``, ``clusters`` or ``users`` keys.
    """
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise ParseError(f"{source}: invalid YAML: {err}") from err
    if not isinstance(raw, dict):
        raise ParseError(f"{source}: kubeconfig must be a mapping, got {type(raw).__name__}")
    missing = [key for key in ("contexts", "clusters", "users") if key not in raw]
    if missing:
        raise ParseError(f"{source}: missing required keys: {', '.join(missing)}")
    try:
        return KubeConfigDocument.model_validate(raw)
    except ValidationError as err:
        raise ParseError(f"{source}: malformed kubeconfig: {err}") from err


def load(path: str | os.PathLike[str] | None = None) -> KubeConfigDocument:
    """Read and parse the kubeconfig at *path* (default: :func:`default_kubeconfig_path`).

    Raises:
        ParseError: if the file cannot be read or is structurally invalid.
    """
    resolved = Path(path).expanduser() if path is not None else default_kubeconfig_path()
    try:
        text = resolved.read_text(encoding="utf-8")
    except OSError as err:
        raise ParseError(f"cannot read kubeconfig {resolved}: {err.strerror or err}") from err
    return load_from_string(text, source=str(resolved))
