"""kubecore - a generic Kubernetes API client with kubeconfig resolution."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("kubecore")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
