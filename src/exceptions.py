"""Project-wide custom exception types."""


class ReportError(RuntimeError):
    """Base class for failures raised while producing a survey report."""


class StoreUnavailableError(ReportError):
    """Raised when the response store cannot be read."""

    def __init__(self, message: str) -> None:  # noqa: D401 – simple constructor
        super().__init__(message)


class ResourceMissingError(ReportError):
    """Raised when a drawing resource (e.g. a logo image) cannot be located."""

    def __init__(self, resource: str) -> None:  # noqa: D401 – simple constructor
        self.resource = resource
        super().__init__(f"Resource not found: {resource}")


class MalformedAnswerError(ValueError):
    """Raised when a survey field does not have the shape its question expects."""

    def __init__(self, field_name: str, value: object) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(
            f"Malformed value for field '{field_name}': {value!r} "
            f"({type(value).__name__})"
        )
