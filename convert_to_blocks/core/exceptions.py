"""Errors raised by the settings surfaces, rendered as RFC 7807 problem documents."""

import logging
from typing import Any, ClassVar

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"


class AppError(Exception):
    """Base error carrying a problem document.

    Subclasses fix ``status_code``, ``title`` and ``slug``; instances carry
    the ``detail`` text and any extension members.
    """

    status_code: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    title: ClassVar[str] = "Internal Server Error"
    slug: ClassVar[str | None] = None

    def __init__(self, detail: str, **extensions: Any) -> None:
        super().__init__(detail)
        self.detail = detail
        self.extensions = extensions

    @property
    def error_type(self) -> str:
        return f"about:blank#{self.slug or self.status_code}"

    def to_problem_detail(self, instance: str | None = None) -> dict[str, Any]:
        """Build the problem document, optionally naming the failing path."""
        problem: dict[str, Any] = {
            "type": self.error_type,
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
        }
        if instance:
            problem["instance"] = instance
        return {**problem, **self.extensions}


class NotFoundError(AppError):
    """An options page or settings group that was never registered."""

    status_code = status.HTTP_404_NOT_FOUND
    title = "Not Found"
    slug = "not-found"

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id is None:
            detail = f"{resource} not found"
        else:
            detail = f"{resource} '{resource_id}' not found"
        super().__init__(detail)


class ValidationError(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    title = "Validation Error"
    slug = "validation-error"

    def __init__(self, detail: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(detail, errors=errors or [])


class UnauthorizedError(AppError):
    """No admin key, or the wrong one."""

    status_code = status.HTTP_401_UNAUTHORIZED
    title = "Unauthorized"
    slug = "unauthorized"

    def __init__(self, detail: str = "Admin key required") -> None:
        super().__init__(detail)


class ForbiddenError(AppError):
    """Authenticated, but the submitted form token does not check out."""

    status_code = status.HTTP_403_FORBIDDEN
    title = "Forbidden"
    slug = "forbidden"

    def __init__(self, detail: str = "The link you followed has expired.") -> None:
        super().__init__(detail)


class ContentTypeRegistryError(AppError):
    """The content type registry could not be queried."""

    status_code = status.HTTP_502_BAD_GATEWAY
    title = "Content Type Registry Unavailable"
    slug = "content-type-registry"

    def __init__(self, detail: str = "Content types could not be listed") -> None:
        super().__init__(detail)


def problem_response(error: AppError, instance: str | None = None) -> JSONResponse:
    return JSONResponse(
        content=error.to_problem_detail(instance),
        status_code=error.status_code,
        media_type=PROBLEM_JSON,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return problem_response(exc, instance=request.url.path)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected failure and answer with a generic 500 problem."""
    logger.error(
        "Unhandled error",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"path": request.url.path},
    )
    return problem_response(AppError("An unexpected error occurred"), instance=request.url.path)


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
