"""
Tests for project-level endpoints and error handling
"""
from unittest.mock import patch

import pytest
from django.utils.dateparse import parse_datetime
from rest_framework import status
from rest_framework.test import APIClient

from contact.views import ContactListView


@pytest.fixture
def api_client():
    return APIClient()


class TestHealthCheck:

    def test_health_reports_ok(self, api_client):
        response = api_client.get('/api/health')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'ok'
        assert parse_datetime(response.data['timestamp']) is not None
        assert response.data['uptime'] >= 0

    def test_uptime_grows(self, api_client):
        first = api_client.get('/api/health').data['uptime']
        second = api_client.get('/api/health/').data['uptime']

        assert second >= first

    def test_health_is_never_rate_limited(self, api_client, settings):
        settings.CONTACT_RATE_LIMIT_MAX = 1

        for _ in range(5):
            assert api_client.get('/api/health').status_code == status.HTTP_200_OK


class TestErrorBoundary:

    def test_unknown_route_returns_json_404(self, api_client):
        response = api_client.get('/api/does-not-exist')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {
            'success': False,
            'error': 'Not found.',
            'code': 'unknown_route',
        }

    @pytest.mark.django_db
    def test_uncaught_error_returns_json_500(self):
        client = APIClient(raise_request_exception=False)

        with patch.object(ContactListView, 'list', side_effect=RuntimeError('unexpected')):
            response = client.get('/api/contacts')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {
            'success': False,
            'error': 'Internal server error.',
            'code': 'server_error',
        }

    @pytest.mark.django_db
    def test_process_survives_a_failed_request(self):
        client = APIClient(raise_request_exception=False)

        with patch.object(ContactListView, 'list', side_effect=RuntimeError('unexpected')):
            client.get('/api/contacts')

        assert client.get('/api/health').status_code == status.HTTP_200_OK
