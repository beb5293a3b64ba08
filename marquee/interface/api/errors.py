"""Mapping of domain failures to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from marquee.domain.error import NotAuthorizedError, NotFoundError, StoreError
from marquee.domain.value import InviteErrorKind

INVITE_ERROR_STATUS: dict[InviteErrorKind, int] = {
    InviteErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    InviteErrorKind.LIST_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    InviteErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    InviteErrorKind.EXPIRED: status.HTTP_410_GONE,
    InviteErrorKind.ALREADY_RESOLVED: status.HTTP_409_CONFLICT,
    InviteErrorKind.ALREADY_CONNECTED: status.HTTP_409_CONFLICT,
    InviteErrorKind.DUPLICATE_PENDING: status.HTTP_409_CONFLICT,
    InviteErrorKind.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def invite_result(
    response: BaseModel, error: InviteErrorKind | None, success_status: int = 200
) -> BaseModel | JSONResponse:
    """Return a use case result, with the status code its error kind maps to.

    The body keeps the `success`/`error`/`message` shape either way.
    """
    if error is None:
        if success_status == status.HTTP_200_OK:
            return response
        return JSONResponse(
            status_code=success_status, content=response.model_dump(mode="json")
        )
    return JSONResponse(
        status_code=INVITE_ERROR_STATUS[error],
        content=response.model_dump(mode="json"),
    )


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "error": "not_found", "message": str(exc)},
    )


async def _not_authorized_handler(
    request: Request, exc: NotAuthorizedError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"success": False, "error": "forbidden", "message": str(exc)},
    )


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logfire.error(
        "Store failure",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "store_error",
            "message": "Something went wrong, please try again",
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(NotAuthorizedError, _not_authorized_handler)
    app.add_exception_handler(StoreError, _store_error_handler)
