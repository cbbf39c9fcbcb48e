"""
BitGo SDK - Errors Module

Exception hierarchy and HTTP status classification.

Every failure the client can produce derives from BitGoError. Non-200
responses become APIError values whose kind is derived from the status
code alone, so callers can branch on semantics (retry, abort, approve)
without knowing raw codes.
"""

import json
from enum import Enum
from typing import Any


class BitGoError(Exception):
    """Base class for all SDK errors."""


class ConfigError(BitGoError):
    """Client configuration is unusable (empty base URL or coin)."""


class EncodingError(BitGoError):
    """Request body could not be serialized to JSON."""


class TransportError(BitGoError):
    """Network-level failure: connection refused, timeout, TLS error."""


class ContextCancelledError(TransportError):
    """The request context was cancelled before the round trip started."""


class DecodeError(BitGoError):
    """A 200 response body did not match the expected result shape."""

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response


class ErrorKind(str, Enum):
    """
    API error types, classified from HTTP status codes.

    Values are the error-type strings the BitGo API itself uses.
    """

    # Request is accepted but requires approval.
    REQUIRES_APPROVAL = 'requires_approval'
    # Request has invalid parameters.
    INVALID_REQUEST = 'invalid_request_error'
    # Request is not authenticated.
    AUTHENTICATION = 'authentication_error'
    NOT_FOUND = 'not_found'
    # Too many requests hit the API too quickly.
    RATE_LIMIT = 'rate_limit_error'
    # Temporary problems with the API (50x and anything unexpected).
    API = 'api_error'


_STATUS_KINDS = {
    202: ErrorKind.REQUIRES_APPROVAL,
    400: ErrorKind.INVALID_REQUEST,
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.AUTHENTICATION,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMIT,
}


def classify(status_code: int) -> ErrorKind:
    """
    Map an HTTP status code to an ErrorKind.

    Args:
        status_code: Status of a non-200 response

    Returns:
        The error kind. Unknown codes (all 5xx, Cloudflare 52x, etc.)
        fall back to ErrorKind.API, which callers treat as retryable.
    """
    return _STATUS_KINDS.get(status_code, ErrorKind.API)


class APIError(BitGoError):
    """
    Error returned by the API for any non-200 response.

    Compared by value: two errors with identical fields are equal.

    Example:
        >>> try:
        ...     client.wallet.consolidate(ctx, wallet_id)
        ... except APIError as e:
        ...     if e.is_temporary():
        ...         retry_later()
    """

    def __init__(
        self,
        kind: ErrorKind,
        status_code: int,
        body: str = '',
        message: str = '',
        request_id: str = ''
    ):
        """
        Initialize error.

        Args:
            kind: Error type derived from the status code
            status_code: HTTP status code
            body: Raw response body returned by the server
            message: Error message decoded from the body
            request_id: Request correlation id decoded from the body
        """
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code
        self.body = body
        self.message = message
        self.request_id = request_id

    @classmethod
    def from_response(cls, status_code: int, body: str) -> 'APIError':
        """
        Build an error from a raw response.

        The body is decoded leniently: anything that is not a JSON object
        with string fields leaves message and request_id empty. The raw
        body is always kept.
        """
        message = ''
        request_id = ''
        try:
            data = json.loads(body)
        except ValueError:
            data = None

        if isinstance(data, dict):
            if isinstance(data.get('error'), str):
                message = data['error']
            if isinstance(data.get('requestId'), str):
                request_id = data['requestId']

        return cls(
            kind=classify(status_code),
            status_code=status_code,
            body=body,
            message=message,
            request_id=request_id
        )

    def _key(self) -> tuple:
        return (self.kind, self.status_code, self.body, self.message, self.request_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f'APIError(kind={self.kind.value!r}, status_code={self.status_code}, '
            f'body={self.body!r}, message={self.message!r}, '
            f'request_id={self.request_id!r})'
        )

    def is_approval_required(self) -> bool:
        """True if the request is accepted but requires approval."""
        return self.kind == ErrorKind.REQUIRES_APPROVAL

    def is_invalid_request(self) -> bool:
        """True if the error is caused by invalid request parameters."""
        return self.kind == ErrorKind.INVALID_REQUEST

    def is_unauthorized(self) -> bool:
        """True if the error is caused by an authentication problem."""
        return self.kind == ErrorKind.AUTHENTICATION

    def is_not_found(self) -> bool:
        """True if the API resource is not found."""
        return self.kind == ErrorKind.NOT_FOUND

    def is_rate_limited(self) -> bool:
        """True if the error is caused by API request throttling."""
        return self.kind == ErrorKind.RATE_LIMIT

    def is_temporary(self) -> bool:
        """True if this is a temporary API error worth retrying."""
        return self.kind == ErrorKind.API
