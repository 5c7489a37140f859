"""Custom exceptions for sos-store.

Validation, storage and routing failures each get their own branch so the
HTTP layers can map them to status codes without inspecting messages.
"""


class SosError(RuntimeError):
    """Base class for all sos-store errors."""
    pass


# Validation Errors
class InvalidBlobIdError(SosError):
    """Blob ID is not safe to use as a filesystem path segment."""

    def __init__(self, blob_id: str):
        self.blob_id = blob_id
        super().__init__(
            f"Invalid blob ID {blob_id!r}: only lowercase letters and digits are allowed"
        )


# Storage Errors
class StorageError(SosError):
    """Base class for storage-related errors."""
    pass


class BlobWriteError(StorageError):
    """Blob could not be written to the store."""

    def __init__(self, blob_id: str, reason: str):
        self.blob_id = blob_id
        self.reason = reason
        super().__init__(f"Failed to store blob {blob_id}: {reason}")


class BlobReadError(StorageError):
    """Blob exists but could not be read."""

    def __init__(self, blob_id: str, reason: str):
        self.blob_id = blob_id
        self.reason = reason
        super().__init__(f"Failed to read blob {blob_id}: {reason}")


# Routing Errors
class RoutingError(SosError):
    """Base class for proxy routing errors."""
    pass


class NoNodeAvailableError(RoutingError):
    """Every registered storage node failed or declined the request."""

    def __init__(self, failures: list):
        self.failures = failures
        if not failures:
            detail = "no storage nodes are registered"
        else:
            shown = ", ".join(f"{node} ({reason})" for node, reason in failures[:3])
            if len(failures) > 3:
                shown += f" and {len(failures) - 3} more"
            detail = f"all storage nodes failed: {shown}"
        super().__init__(detail)


# Configuration Errors
class ConfigError(SosError):
    """Base class for configuration errors."""
    pass


class UnsupportedProviderError(ConfigError):
    """Storage provider name is not known."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Storage provider '{provider}' is not supported (available: fs)")
