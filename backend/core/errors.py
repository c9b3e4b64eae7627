from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """Error raised by JSON API routes, rendered as ``{"error": message}``."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def unauthorized() -> ApiError:
    return ApiError(status.HTTP_401_UNAUTHORIZED, 'Unauthorized')


def internal_error() -> ApiError:
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal Server Error')


async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
