"""Error taxonomy for the GigaChat client."""


class GigaChatError(Exception):
    """Base class for every error raised by gigapy."""


class AuthError(GigaChatError):
    """Token acquisition failed: transport, non-success status or bad body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(GigaChatError):
    """The HTTP call could not be completed (network, DNS, timeout)."""

    def __init__(self, method: str, path: str, cause: Exception) -> None:
        super().__init__(f"{method} {path}: request failed: {cause}")
        self.method = method
        self.path = path


class APIError(GigaChatError):
    """The resource endpoint answered with a non-success status."""

    def __init__(self, operation: str, status_code: int, body: str) -> None:
        super().__init__(f"{operation} failed with status {status_code}: {body}")
        self.operation = operation
        self.status_code = status_code
        self.body = body


class DecodeError(GigaChatError):
    """A response body did not match the expected schema."""

    def __init__(self, operation: str, body: str, cause: Exception) -> None:
        super().__init__(f"failed to decode {operation} response: {cause}")
        self.operation = operation
        self.body = body
