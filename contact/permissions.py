"""
Contact Permissions

Access control for the contact management endpoints.
"""
from django.conf import settings
from django.utils.crypto import constant_time_compare
from rest_framework import permissions


class HasContactAdminKey(permissions.BasePermission):
    """
    Require the configured admin key in the ``X-Api-Key`` header.

    With ``CONTACT_ADMIN_API_KEY`` unset the endpoints stay open.
    """

    message = 'A valid X-Api-Key header is required.'

    def has_permission(self, request, view):
        expected = settings.CONTACT_ADMIN_API_KEY
        if not expected:
            return True
        provided = request.headers.get('X-Api-Key', '')
        return constant_time_compare(provided, expected)
