"""
Contact Serializers

Serializers for contact form submission, listing and status updates.
"""
from django.conf import settings
from rest_framework import serializers

from .exceptions import MISSING_FIELD, INVALID_EMAIL, FIELD_TOO_LONG
from .models import ContactSubmission
from .validators import normalize_email, sanitize_text


# DRF error code -> contact violation code
VIOLATION_CODES = {
    'required': MISSING_FIELD,
    'blank': MISSING_FIELD,
    'null': MISSING_FIELD,
    'max_length': FIELD_TOO_LONG,
}


def _required_messages(label):
    message = f"{label} is required"
    return {'required': message, 'blank': message, 'null': message}


class ContactSubmissionSerializer(serializers.Serializer):
    """
    Public contact form submission serializer.

    Every field is checked on each call and all violations are reported
    together, at most one per field. Valid text comes back trimmed and
    HTML-escaped; the email comes back normalized.
    """

    name = serializers.CharField(
        required=True,
        error_messages=_required_messages('Name'),
        help_text="Name of the sender"
    )

    # Matches the width of the email column
    email = serializers.EmailField(
        required=True,
        max_length=254,
        error_messages={
            **_required_messages('Email'),
            'invalid': 'Invalid email address',
            'max_length': 'Email must be at most {max_length} characters',
        },
        help_text="Email address for follow-up"
    )

    message = serializers.CharField(
        required=True,
        error_messages=_required_messages('Message'),
        help_text="Message content"
    )

    def _check_length(self, value, limit, label):
        # Length policy is read per call so it follows settings overrides
        if len(value) > limit:
            raise serializers.ValidationError(
                f"{label} must be at most {limit} characters",
                code='max_length'
            )

    def validate_name(self, value):
        """Enforce the name length limit, then sanitize."""
        self._check_length(value, settings.CONTACT_NAME_MAX_LENGTH, 'Name')
        return sanitize_text(value)

    def validate_message(self, value):
        """Enforce the message length limit, then sanitize."""
        self._check_length(value, settings.CONTACT_MESSAGE_MAX_LENGTH, 'Message')
        return sanitize_text(value)

    def validate_email(self, value):
        """Normalize the address so aliases of one mailbox are stored alike."""
        try:
            return normalize_email(value)
        except ValueError:
            raise serializers.ValidationError('Invalid email address', code='invalid')

    def violations(self):
        """
        Flatten ``self.errors`` into a list of per-field violations.

        Returns:
            list of dicts with ``field``, ``code`` and ``message`` keys
        """
        details = []
        for field, errors in self.errors.items():
            error = errors[0]
            code = VIOLATION_CODES.get(error.code)
            if code is None:
                code = INVALID_EMAIL if field == 'email' else 'invalid_value'
            details.append({
                'field': None if field == 'non_field_errors' else field,
                'code': code,
                'message': str(error),
            })
        return details


class ContactSubmissionDetailSerializer(serializers.ModelSerializer):
    """
    Full representation of a stored submission.
    """

    class Meta:
        model = ContactSubmission
        fields = [
            'id', 'name', 'email', 'message', 'timestamp',
            'ip_address', 'user_agent', 'status'
        ]
        read_only_fields = fields


class ContactStatusUpdateSerializer(serializers.Serializer):
    """
    Serializer for changing the status of a submission.
    """

    status = serializers.ChoiceField(
        choices=ContactSubmission.Status.choices,
        required=True,
        help_text="One of: new, read, replied, archived"
    )
