"""Domain Errors

Typed failures raised by domain rules. Use cases convert these into
``libs.result.Error`` so no exception crosses the use case boundary.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Error taxonomy"""
    NOT_FOUND = "not_found"
    PRECONDITION_FAILED = "precondition_failed"
    VALIDATION_FAILED = "validation_failed"
    AUTHORIZATION_FAILED = "authorization_failed"
    CONFLICT_RETRY_EXHAUSTED = "conflict_retry_exhausted"
    INTERNAL = "internal"


class InvoicingError(Exception):
    """Base class for domain rule violations"""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class NotFoundError(InvoicingError):
    kind = ErrorKind.NOT_FOUND


class PreconditionFailedError(InvoicingError):
    kind = ErrorKind.PRECONDITION_FAILED


class ValidationFailedError(InvoicingError):
    kind = ErrorKind.VALIDATION_FAILED


class AuthorizationFailedError(InvoicingError):
    kind = ErrorKind.AUTHORIZATION_FAILED
