"""Application error kinds and their HTTP mapping."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GeoBackendError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = 'internal_error'
    default_message = 'Internal server error.'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MalformedInputError(GeoBackendError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'malformed_input'
    default_message = 'Request body is malformed.'


class UnauthenticatedError(GeoBackendError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 'unauthenticated'
    default_message = 'You must be logged in.'


class UnknownIdentityError(GeoBackendError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 'unknown_identity'
    default_message = 'User not recognized.'


class ForbiddenError(GeoBackendError):
    status_code = status.HTTP_403_FORBIDDEN
    code = 'forbidden'
    default_message = 'Access denied.'


class NotFoundError(GeoBackendError):
    status_code = status.HTTP_404_NOT_FOUND
    code = 'not_found'
    default_message = 'Resource not found.'


class DuplicateIdentityError(GeoBackendError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'duplicate_identity'
    default_message = 'Email is already registered.'


class InvalidCredentialsError(GeoBackendError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = 'invalid_credentials'
    default_message = 'Invalid email or password.'


class StoreFailureError(GeoBackendError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = 'store_failure'
    default_message = 'Storage operation failed.'


class StoreTimeoutError(GeoBackendError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    code = 'timeout'
    default_message = 'Storage operation timed out.'


def error_response(error: GeoBackendError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={'code': error.code, 'message': error.message},
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return MalformedInputError.default_message

    first = errors[0]
    location = '.'.join(str(part) for part in first.get('loc', ()) if part != 'body')
    message = first.get('msg', 'invalid value')
    if location:
        return f'{location}: {message}'
    return message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GeoBackendError)
    async def handle_geo_backend_error(request: Request, exc: GeoBackendError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(MalformedInputError(_describe_validation_error(exc)))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception('Unhandled error on %s %s', request.method, request.url.path)
        return error_response(StoreFailureError('Internal server error.'))
