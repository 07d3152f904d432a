"""Resource-level domain errors."""


class ResourceError(Exception):
    """Base resource exception."""

    error_code = "resource_error"


class InternalConsistencyError(ResourceError):
    """Raised when the API returns other than exactly one record for a single network."""

    error_code = "internal_consistency_error"

    def __init__(self, *, operation: str, record_count: int) -> None:
        message = (
            f"Internal Error: {operation} should have returned only one object "
            f"(received {record_count})"
        )
        super().__init__(message)
        self.operation = operation
        self.record_count = record_count


class InvalidResourceIdError(ResourceError, ValueError):
    """Raised when the recorded resource id is not a private network id."""

    error_code = "invalid_resource_id"

    def __init__(self, resource_id: str) -> None:
        super().__init__(f"resource id is not a private network id: {resource_id!r}")
        self.resource_id = resource_id
