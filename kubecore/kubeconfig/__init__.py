"""Kubeconfig loading and credential resolution."""

from kubecore.kubeconfig.loader import default_kubeconfig_path, load, load_from_string
from kubecore.kubeconfig.resolver import (
    from_kube_config,
    from_token,
    in_cluster_config,
    resolve,
    switch_context,
)

__all__ = [
    "default_kubeconfig_path",
    "from_kube_config",
    "from_token",
    "in_cluster_config",
    "load",
    "load_from_string",
    "resolve",
    "switch_context",
]
