"""
Shared pytest fixtures for contact tests.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from contact.models import ContactSubmission


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear cache before and after each test so rate limit counters never leak."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def open_admin_endpoints(settings):
    """Run without an admin key unless a test sets one."""
    settings.CONTACT_ADMIN_API_KEY = ''


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def valid_payload():
    return {
        'name': 'John Doe',
        'email': 'john.doe@example.com',
        'message': 'I would like to talk about a project.',
    }


@pytest.fixture
def sample_submission(db):
    return ContactSubmission.objects.create(
        name='Jane Roe',
        email='jane@example.com',
        message='Loved the portfolio, are you available for freelance work?',
        ip_address='192.168.1.1',
        user_agent='Mozilla/5.0'
    )
