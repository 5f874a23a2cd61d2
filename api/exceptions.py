import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class InvalidArgument(APIException):
    """Malformed identifier, unknown section or unknown item type."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid argument.'
    default_code = 'invalid_argument'


class AuthenticationRequired(InvalidArgument):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Authentication required.'
    default_code = 'auth_required'


class TransientError(APIException):
    """The store timed out or is unreachable; the caller may retry."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Service temporarily unavailable, please retry.'
    default_code = 'transient'


def exception_handler(exc, context):
    """DRF exception handler that reports database failures as retryable 503s."""
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.exception('Database error in %s: %s', type(view).__name__ if view else 'unknown view', exc)
        exc = TransientError()
    return drf_exception_handler(exc, context)
