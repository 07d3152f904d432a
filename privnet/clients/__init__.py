"""Remote private network clients."""

from privnet.clients.base import (
    ClientAuthError,
    ClientConflictError,
    ClientNotFoundError,
    ClientRequestError,
    ClientResponseError,
    ErrorKind,
    InstanceRecord,
    InstanceStatus,
    NetworkClientError,
    PrivateIpV4Config,
    PrivateNetworkClient,
    PrivateNetworkRecord,
)
from privnet.clients.factory import create_network_client

__all__ = [
    "ClientAuthError",
    "ClientConflictError",
    "ClientNotFoundError",
    "ClientRequestError",
    "ClientResponseError",
    "ErrorKind",
    "InstanceRecord",
    "InstanceStatus",
    "NetworkClientError",
    "PrivateIpV4Config",
    "PrivateNetworkClient",
    "PrivateNetworkRecord",
    "create_network_client",
]
