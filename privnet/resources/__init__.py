"""Private network resource lifecycle."""

from privnet.resources.data import ResourceData
from privnet.resources.errors import (
    InternalConsistencyError,
    InvalidResourceIdError,
    ResourceError,
)
from privnet.resources.private_network import (
    DrainFailure,
    DrainReport,
    PrivateNetworkResource,
)

__all__ = [
    "DrainFailure",
    "DrainReport",
    "InternalConsistencyError",
    "InvalidResourceIdError",
    "PrivateNetworkResource",
    "ResourceData",
    "ResourceError",
]
