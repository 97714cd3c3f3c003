import math

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..services.results import ErrorKind, ServiceResult

STATUS_BY_KIND = {
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: ServiceResult):
    """Return the result value or raise the HTTPException matching its error."""
    if result.ok:
        return result.value
    err = result.error
    detail = f"{err.message}: {err.detail}" if err.detail else err.message
    raise HTTPException(status_code=STATUS_BY_KIND[err.kind], detail=detail)


def _finite_or_str(value: float):
    return value if math.isfinite(value) else str(value)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # NaN/Infinity inputs are echoed back as strings; JSON cannot carry them
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors(), custom_encoder={float: _finite_or_str})},
    )
