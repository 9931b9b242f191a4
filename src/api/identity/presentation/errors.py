"""Translation of request and store failures into 400 responses."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from identity.application.value_objects import IdentityResult
from identity.presentation.users.models import ErrorDetail


def bad_request(errors: list[ErrorDetail]) -> HTTPException:
    """Build a 400 HTTPException whose detail is the ordered error list."""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=[error.model_dump() for error in errors],
    )


def identity_failure(result: IdentityResult) -> HTTPException:
    """Build a 400 HTTPException from a failed identity result."""
    return bad_request(ErrorDetail.from_result(result))


def _field_path(location: tuple | list) -> str:
    # ("body", "userName") -> "userName"
    parts = [str(part) for part in location]
    if parts and parts[0] in ("body", "path", "query", "header"):
        parts = parts[1:]
    return ".".join(parts)


async def request_validation_error_handler(
    _: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests as 400 with one entry per problem."""
    errors = [
        ErrorDetail(field=_field_path(error.get("loc", ())), message=error["msg"])
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": [error.model_dump() for error in errors]}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the identity error handlers on an application."""
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
