"""Resource clients and the HTTP transport they use."""

from kubecore.client.api import ApiGroup, Client
from kubecore.client.resource_client import ResourceClient
from kubecore.client.targets import Everything, LogOptions, Name, Selector
from kubecore.client.transport import ApiRequest, HttpxTransport, Transport

__all__ = [
    "ApiGroup",
    "ApiRequest",
    "Client",
    "Everything",
    "HttpxTransport",
    "LogOptions",
    "Name",
    "ResourceClient",
    "Selector",
    "Transport",
]
