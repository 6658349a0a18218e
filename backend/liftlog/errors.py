# liftlog/errors.py
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError


class LiftlogError(Exception):
    """Base for errors the API maps onto a status code."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(LiftlogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InvalidInputError(LiftlogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body"


class ConflictError(LiftlogError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class TransactionFailure(LiftlogError):
    """A store error inside a unit of work; everything in it was rolled back."""
    default_message = "Transaction failed and was rolled back"


async def liftlog_exception_handler(request: Request, exc: LiftlogError):
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "request_id": request_id},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": jsonable_encoder(exc.errors()),
            "message": InvalidInputError.default_message,
            "request_id": request_id,
        },
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError):
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Database conflict", "request_id": request_id},
    )
