"""
REST framework exception handling.

Gives every API error the same JSON shape and keeps database
details out of responses.
"""
import logging

from django.db import DatabaseError
from rest_framework.exceptions import ErrorDetail, ValidationError
from rest_framework.views import exception_handler

from contact.exceptions import ContactValidationError, PersistenceError, RateLimited

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    Format API exceptions as ``{"success": false, "error": ..., "code": ...}``.

    Database faults become a generic ``PersistenceError``. Anything DRF does
    not recognise is left to Django's ``handler500``.
    """
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error(
            "Database error in %s", view.__class__.__name__ if view else 'unknown view',
            exc_info=exc
        )
        exc = PersistenceError()

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ContactValidationError):
        data = {
            'success': False,
            'error': str(exc.detail),
            'code': exc.default_code,
            'details': exc.details,
        }
    elif isinstance(exc, ValidationError):
        data = {
            'success': False,
            'error': 'Invalid request.',
            'code': 'invalid',
            'details': exc.detail,
        }
    else:
        detail = getattr(exc, 'detail', None)
        code = detail.code if isinstance(detail, ErrorDetail) else getattr(exc, 'default_code', 'error')
        data = {
            'success': False,
            'error': str(detail) if detail is not None else 'Request failed.',
            'code': code,
        }

    if isinstance(exc, RateLimited):
        data['retry_after'] = exc.retry_after
        response['Retry-After'] = str(exc.retry_after)
        if exc.limit is not None:
            response['RateLimit-Limit'] = str(exc.limit)
        response['RateLimit-Remaining'] = '0'
        response['RateLimit-Reset'] = str(exc.retry_after)

    response.data = data
    return response
