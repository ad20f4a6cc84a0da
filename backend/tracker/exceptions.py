# ============================================
# tracker/exceptions.py
# ============================================
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, connections, transaction
from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status

from tracker.responses import error_response

logger = logging.getLogger(__name__)


def set_rollback():
    """Roll back the request transaction when ATOMIC_REQUESTS wraps the view."""
    for conn in connections.all():
        if conn.settings_dict.get("ATOMIC_REQUESTS") and conn.in_atomic_block:
            transaction.set_rollback(True, using=conn.alias)


class AppError(drf_exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error'

    def __init__(self, message=None, errors=None):
        self.message = message or self.default_detail
        self.errors = errors
        super().__init__(detail=self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Validation failed'


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized'


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Access denied'


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found'


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource conflict'


def _translate(exc):
    """Map framework / persistence exceptions onto the AppError taxonomy."""
    if isinstance(exc, Http404):
        return NotFoundError()
    if isinstance(exc, DjangoPermissionDenied):
        return AuthorizationError(str(exc) or None)
    if isinstance(exc, DjangoValidationError):
        return ValidationError('; '.join(exc.messages))
    if isinstance(exc, ProtectedError):
        return ConflictError('Resource is still referenced by other records')
    if isinstance(exc, IntegrityError):
        return ConflictError('Duplicate field value entered')
    return exc


def _detail_message(detail) -> str:
    if isinstance(detail, (list, tuple)) and detail:
        return _detail_message(detail[0])
    if isinstance(detail, dict) and detail:
        return _detail_message(next(iter(detail.values())))
    return str(detail)


def api_exception_handler(exc, context):
    """
    DRF EXCEPTION_HANDLER: every failure leaves the API as
    {success: false, message, errors?, timestamp}.
    """
    exc = _translate(exc)
    view = context.get('view')
    view_name = type(view).__name__ if view is not None else '-'

    if isinstance(exc, AppError):
        set_rollback()
        level = logging.WARNING if exc.status_code in (401, 403) else logging.INFO
        logger.log(level, "[api] %s %s: %s", view_name, exc.status_code, exc.message)
        return error_response(exc.status_code, exc.message, exc.errors)

    if isinstance(exc, drf_exceptions.ValidationError):
        set_rollback()
        logger.info("[api] %s 400: %s", view_name, exc.detail)
        return error_response(status.HTTP_400_BAD_REQUEST, _detail_message(exc.detail), exc.detail)

    if isinstance(exc, drf_exceptions.APIException):
        set_rollback()
        headers = {}
        if getattr(exc, 'auth_header', None):
            headers['WWW-Authenticate'] = exc.auth_header
        if getattr(exc, 'wait', None):
            headers['Retry-After'] = '%d' % exc.wait
        response = error_response(exc.status_code, _detail_message(exc.detail))
        for key, value in headers.items():
            response[key] = value
        return response

    logger.exception("[api] %s unhandled error: %s", view_name, exc)
    set_rollback()
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')
