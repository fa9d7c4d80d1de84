"""Error taxonomy shared by handlers, and the FastAPI handlers that render it."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'An error occurred while processing your request'
AUTH_ALLOWED_METHODS = 'POST, GET'
AUTH_PATHS = frozenset({'/api/signup', '/api/login', '/api/logout', '/api/user'})


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid request'


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Authentication required'


class InvalidToken(AuthError):
    default_message = 'Invalid session'


class ExpiredToken(AuthError):
    default_message = 'Session expired'


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class ConflictError(AppError):
    # Duplicate registrations are reported to the client as a bad request.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Email already registered'


class ConfigError(AppError):
    default_message = 'Server misconfigured'


class UnexpectedError(AppError):
    pass


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message}, headers=headers)


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error('%s on %s %s: %s', type(exc).__name__, request.method, request.url.path, exc.message,
                     exc_info=exc.__cause__ or exc)
        return error_response(exc.status_code, GENERIC_ERROR_MESSAGE)
    return error_response(exc.status_code, exc.message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        headers = dict(getattr(exc, 'headers', None) or {})
        if request.url.path in AUTH_PATHS:
            headers['Allow'] = AUTH_ALLOWED_METHODS
        return error_response(exc.status_code, f'Method {request.method} Not Allowed', headers=headers)
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, 'headers', None))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        message = error.get('msg', 'Invalid value')
        messages.append(f'{location}: {message}' if location else message)
    return error_response(status.HTTP_400_BAD_REQUEST, '; '.join(messages) or 'Invalid request')


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
