"""Error taxonomy for ingestion and search."""


class LogstreamError(Exception):
    """Base class for all logstream errors."""


class ValidationError(LogstreamError):
    """A submitted log body was rejected. Correctable by the client."""


class MalformedBody(ValidationError):
    """The body is not a JSON object."""

    def __init__(self) -> None:
        super().__init__("Request body must be a JSON object")


class MissingField(ValidationError):
    """A required field is absent, null or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class WrongType(ValidationError):
    """A required field is present but not a string."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f'Field "{field}" must be a string')


class InvalidEnum(ValidationError):
    """The level is not one of the allowed values."""

    def __init__(self, value: str, allowed: tuple[str, ...]):
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Invalid level {value!r}: must be one of {', '.join(allowed)}"
        )


class InvalidTimestamp(ValidationError):
    """The timestamp does not parse as an ISO 8601 date-time."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Invalid timestamp {value!r}: must be valid ISO 8601 date string"
        )


class InvalidMetadataShape(ValidationError):
    """Metadata was supplied but is not a JSON object with string keys."""

    def __init__(self) -> None:
        super().__init__(
            'Field "metadata" must be an object with string keys and JSON values'
        )


class StorageUnavailable(LogstreamError):
    """The log store could not be read or written.

    The message is safe to show to clients; the underlying cause is kept
    on ``__cause__`` for server-side logs.
    """

    def __init__(self, operation: str = "read/write"):
        self.operation = operation
        super().__init__(f"Server could not {operation} log data")
