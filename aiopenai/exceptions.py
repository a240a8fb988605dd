"""
Exception types raised by the client.

Usage:
    from aiopenai.exceptions import raise_for_status, RateLimitError

    try:
        ...
    except RateLimitError as e:
        print(e.status_code, e.message)
"""

import logging
from typing import Any, Literal, NoReturn, Optional

import httpx
import orjson

logger = logging.getLogger(__name__)


class OpenAIError(Exception):
    """Base class for every error raised by aiopenai."""


class ConfigurationError(OpenAIError):
    """Raised when the client cannot be built from the given settings."""


class APIError(OpenAIError):
    """Error object reported by the remote API."""

    def __init__(
        self,
        message: str,
        type: Optional[str] = None,
        code: Optional[str] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.type = type
        self.code = code
        self.body = body


class APIStatusError(APIError):
    """Non-2xx HTTP response."""

    def __init__(self, message: str, status_code: int, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code

    def __str__(self):
        return f"[{self.status_code}] {self.message}"


class BadRequestError(APIStatusError):
    pass


class AuthenticationError(APIStatusError):
    pass


class PermissionDeniedError(APIStatusError):
    pass


class NotFoundError(APIStatusError):
    pass


class UnprocessableEntityError(APIStatusError):
    pass


class RateLimitError(APIStatusError):
    pass


class InternalServerError(APIStatusError):
    pass


class TransportError(OpenAIError):
    """Network or connection failure reported by httpx."""


# Name used by most OpenAI-style clients
APIConnectionError = TransportError


class APITimeoutError(TransportError):
    pass


class DecodeFailure(OpenAIError):
    """A response could not be decoded.

    `kind` is "framing" when the byte stream itself was malformed or truncated,
    and "payload" when a complete frame or body held invalid content.
    """

    kind: Literal["framing", "payload"]

    def __init__(self, message: str, raw: bytes = b""):
        super().__init__(message)
        self.raw = raw


class FramingError(DecodeFailure):
    kind = "framing"


class PayloadError(DecodeFailure):
    kind = "payload"


STATUS_ERRORS: dict[int, type[APIStatusError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    422: UnprocessableEntityError,
    429: RateLimitError,
}


def error_from_body(body: Any, default: str) -> tuple[str, Optional[str], Optional[str]]:
    """Pull (message, type, code) out of an `{"error": {...}}` body."""
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return (
            error.get("message") or default,
            error.get("type"),
            None if error.get("code") is None else str(error.get("code")),
        )
    if isinstance(error, str):
        return error, None, None
    return default, None, None


def raise_for_status(response: httpx.Response) -> None:
    """Raise the matching APIStatusError for a non-2xx response.

    The response body must already be read.
    """
    if response.is_success:
        return
    raise_status_error(response)


def raise_status_error(response: httpx.Response) -> NoReturn:
    status_code = response.status_code
    try:
        body = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        body = response.text

    message, error_type, code = error_from_body(
        body, body if isinstance(body, str) and body else response.reason_phrase
    )

    if status_code >= 500:
        error_class = InternalServerError
    else:
        error_class = STATUS_ERRORS.get(status_code, APIStatusError)

    logger.warning(f"API returned {status_code}: {message}")
    raise error_class(message, status_code, type=error_type, code=code, body=body)
