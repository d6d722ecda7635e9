"""
Exception handlers mapping the reward network's error taxonomy to HTTP.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from rewards.core.logging_config import get_logger
from rewards.exceptions import (
    ConcurrentModification,
    InvalidAllocation,
    NotFound,
    PersistenceFailure,
    RewardNetworkError,
)
from rewards.schemas.error import ErrorResponse

logger = get_logger(__name__)

# Checked in order; the first matching base class wins
STATUS_CODES = (
    (NotFound, status.HTTP_404_NOT_FOUND),
    (InvalidAllocation, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ConcurrentModification, status.HTTP_409_CONFLICT),
    (PersistenceFailure, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_code_for(exc: RewardNetworkError) -> int:
    for error_type, status_code in STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def reward_network_error_handler(request: Request, exc: RewardNetworkError) -> JSONResponse:
    status_code = status_code_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc}",
        extra={"path": request.url.path, "status_code": status_code},
    )
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RewardNetworkError, reward_network_error_handler)
