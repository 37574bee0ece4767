"""Exception handlers that render errors as JSON bodies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from litestar import MediaType, Response
from litestar.exceptions import MethodNotAllowedException, NotFoundException, ValidationException
from litestar.status_codes import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from chronoelite.lib.exceptions import ApplicationError

if TYPE_CHECKING:
    from litestar import Request
    from litestar.types import ExceptionHandlersMap

AVAILABLE_ROUTES = (
    "/api/health",
    "/api/test",
    "/api/watches",
    "/api/watches/compare",
    "/api/watches/featured",
    "/api/watches/:id",
)


def application_error_handler(_: Request[Any, Any, Any], exc: ApplicationError) -> Response[dict[str, Any]]:
    return Response(content=exc.to_dict(), status_code=exc.status_code, media_type=MediaType.JSON)


def validation_error_handler(_: Request[Any, Any, Any], exc: ValidationException) -> Response[dict[str, Any]]:
    """Invalid query parameters, e.g. ``minPrice=abc``."""
    return Response(
        content={"error": "Invalid query parameters", "details": exc.extra or exc.detail},
        status_code=HTTP_400_BAD_REQUEST,
        media_type=MediaType.JSON,
    )


def route_not_found_handler(request: Request[Any, Any, Any], _: Exception) -> Response[dict[str, Any]]:
    """Unknown path or unsupported method; lists the routes that do exist."""
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return Response(
        content={
            "error": "Route not found",
            "path": path,
            "method": request.method,
            "available_routes": list(AVAILABLE_ROUTES),
        },
        status_code=HTTP_404_NOT_FOUND,
        media_type=MediaType.JSON,
    )


exception_handlers: ExceptionHandlersMap = {
    ApplicationError: application_error_handler,  # type: ignore[dict-item]
    ValidationException: validation_error_handler,  # type: ignore[dict-item]
    NotFoundException: route_not_found_handler,
    MethodNotAllowedException: route_not_found_handler,
}
