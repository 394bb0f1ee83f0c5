"""
Contact API Exceptions

Every failure the contact endpoints report, as DRF exceptions.
The project-wide exception handler turns them into JSON bodies of the form
``{"success": false, "error": ..., "code": ...}``.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


# Per-field violation codes used in validation error details
MISSING_FIELD = 'missing_field'
INVALID_EMAIL = 'invalid_email'
FIELD_TOO_LONG = 'field_too_long'


class ContactValidationError(APIException):
    """
    Submitted contact data failed validation.

    ``details`` is a list of ``{"field", "code", "message"}`` dicts,
    one per offending field.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Validation failed.'
    default_code = 'validation_error'

    def __init__(self, details, detail=None):
        super().__init__(detail=detail)
        self.details = details


class InvalidStatus(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid status.'
    default_code = 'invalid_status'


class ContactNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Contact not found.'
    default_code = 'not_found'


class RateLimited(APIException):
    """Client exceeded the submission cap for the current window."""
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = 'Too many submissions from this IP, please try again later.'
    default_code = 'rate_limited'

    def __init__(self, retry_after, limit=None, detail=None):
        super().__init__(detail=detail)
        self.retry_after = int(retry_after)
        self.limit = limit


class PersistenceError(APIException):
    """The store could not complete a read or write. Never carries DB detail."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error.'
    default_code = 'persistence_error'
