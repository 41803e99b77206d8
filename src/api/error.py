"""HTTP error mapping

Routes raise ClientError with the use case's Error; the handler renders
it as {"error": {"code": ..., "message": ...}}.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error
from src.domain.errors import ErrorKind

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
    ErrorKind.PRECONDITION_FAILED.value: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION_FAILED.value: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.AUTHORIZATION_FAILED.value: status.HTTP_403_FORBIDDEN,
    ErrorKind.CONFLICT_RETRY_EXHAUSTED.value: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(error: Error) -> int:
    """HTTP status for a use case error; 400 when the kind is unknown"""
    if error.reason in STATUS_BY_KIND:
        return STATUS_BY_KIND[error.reason]
    if error.code.endswith("NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


class ClientError(Exception):
    def __init__(self, error: Error, status_code: int = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_for(error)


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )
