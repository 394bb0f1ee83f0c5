"""
Contact Filters

Query-string filtering for the submission listing.
"""
import django_filters

from .models import ContactSubmission


class ContactSubmissionFilter(django_filters.FilterSet):
    """Filter submissions by ``?status=``; unknown values fail validation."""

    status = django_filters.ChoiceFilter(choices=ContactSubmission.Status.choices)

    class Meta:
        model = ContactSubmission
        fields = ['status']
