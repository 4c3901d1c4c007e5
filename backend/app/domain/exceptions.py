"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ConfigurationMissingError(Exception):
    """Raised when a required remote store setting (access key, bin id) is empty."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"JSONBin {setting} is not configured")


class RemoteStoreError(Exception):
    """Raised when the remote document store rejects a request or is unreachable.

    ``status_code`` is ``None`` for transport-level failures (DNS, refused
    connection, timeout) where no HTTP response was received.
    """

    def __init__(self, operation: str, status_code: int | None, message: str):
        self.operation = operation
        self.status_code = status_code
        self.message = message
        status = status_code if status_code is not None else "transport"
        super().__init__(f"[{operation}] {status}: {message}")


class BinNotFoundError(RemoteStoreError):
    """Raised when the requested bin does not exist (HTTP 404)."""

    def __init__(self, bin_id: str, message: str = "Bin not found"):
        self.bin_id = bin_id
        super().__init__(operation="fetch", status_code=404, message=message)


class QuoteSaveError(Exception):
    """Raised when a staged quote change could not be persisted and was rolled back."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidSettingError(ValueError):
    """Raised when a display setting value is outside its allowed range."""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {reason}")
