"""Error taxonomy for ns-fetch."""
from typing import Any, List, Optional


class NsFetchError(Exception):
    """Base class for every error the tool reports to the user."""


class ConfigError(NsFetchError):
    """Credentials missing, unreadable or incomplete."""


class ValidationError(NsFetchError):
    """Missing or invalid input for an operation."""


class PathConflictError(ValidationError):
    """A dotted field path collides with a value already in the payload."""

    def __init__(self, header: str, path: str, message: str):
        super().__init__(message)
        self.header = header
        self.path = path


class SigningError(NsFetchError):
    """Credentials are not usable for OAuth signing."""


class ParseError(NsFetchError):
    """Malformed JSON, CSV, Excel or map file input."""


class TransportError(NsFetchError):
    """HTTP call failed, either on the network or with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def is_http_error(self) -> bool:
        return self.status_code is not None


class BatchDispatchError(TransportError):
    """A sequential batch stopped at the first failing record."""

    def __init__(self, index: int, completed: List[Any], cause: TransportError):
        super().__init__(
            f"Record {index} failed: {cause}",
            status_code=cause.status_code,
            body=cause.body,
        )
        self.index = index
        self.completed = completed
        self.cause = cause
