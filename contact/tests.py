"""
Tests for the contact form API
"""
import logging
from io import StringIO
from unittest.mock import patch

import pytest
from django.contrib import admin
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError, OperationalError, connection, connections
from django.test import RequestFactory
from django.utils.dateparse import parse_datetime
from rest_framework import status

from contact.admin import ContactSubmissionAdmin
from contact.models import ContactSubmission
from contact.rate_limiting import CacheRateLimiter
from contact.serializers import ContactSubmissionSerializer
from contact.validators import normalize_email, sanitize_text
from contact.views import ContactListView


def submit(client, data, **extra):
    return client.post('/api/contact', data, format='json', **extra)


@pytest.mark.django_db
class TestContactFormSubmission:
    """Test public contact form submission."""

    def test_submit_valid_contact_form(self, api_client, valid_payload):
        response = submit(api_client, valid_payload, HTTP_USER_AGENT='pytest-agent')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        assert response.data['message'] == 'Message submitted successfully!'
        assert isinstance(response.data['id'], int)

        stored = ContactSubmission.objects.get(pk=response.data['id'])
        assert stored.name == 'John Doe'
        assert stored.status == ContactSubmission.Status.NEW
        assert stored.ip_address == '127.0.0.1'
        assert stored.user_agent == 'pytest-agent'
        assert stored.timestamp is not None

    def test_submission_is_trimmed_and_normalized(self, api_client):
        data = {'name': 'John Doe', 'email': 'JOHN@Example.com ', 'message': ' Hi '}

        response = submit(api_client, data)

        assert response.status_code == status.HTTP_201_CREATED
        stored = ContactSubmission.objects.get(pk=response.data['id'])
        assert stored.name == 'John Doe'
        assert stored.email == 'john@example.com'
        assert stored.message == 'Hi'
        assert stored.status == 'new'

    def test_html_is_escaped_before_storage(self, api_client):
        data = {
            'name': '<b>Bob</b>',
            'email': 'bob@example.com',
            'message': '<script>alert("x")</script> & more',
        }

        response = submit(api_client, data)

        stored = ContactSubmission.objects.get(pk=response.data['id'])
        assert stored.name == '&lt;b&gt;Bob&lt;/b&gt;'
        assert '<script>' not in stored.message
        assert stored.message.startswith('&lt;script&gt;')
        assert '&amp; more' in stored.message

    def test_ids_are_strictly_increasing(self, api_client, valid_payload):
        ids = [submit(api_client, valid_payload).data['id'] for _ in range(3)]

        assert ids == sorted(ids)
        assert len(set(ids)) == 3

    def test_user_agent_is_truncated(self, api_client, valid_payload):
        response = submit(api_client, valid_payload, HTTP_USER_AGENT='x' * 800)

        stored = ContactSubmission.objects.get(pk=response.data['id'])
        assert len(stored.user_agent) == 500

    def test_forwarded_for_is_ignored_without_trusted_proxies(self, api_client, valid_payload):
        response = submit(
            api_client, valid_payload,
            HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1'
        )

        stored = ContactSubmission.objects.get(pk=response.data['id'])
        assert stored.ip_address == '127.0.0.1'

    @pytest.mark.parametrize('proxy_count,expected', [
        (1, '10.0.0.1'),
        (2, '203.0.113.7'),
        (3, '127.0.0.1'),
    ])
    def test_forwarded_for_hop_behind_trusted_proxies(
        self, api_client, valid_payload, settings, proxy_count, expected
    ):
        settings.CONTACT_TRUSTED_PROXY_COUNT = proxy_count

        response = submit(
            api_client, valid_payload,
            HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1'
        )

        stored = ContactSubmission.objects.get(pk=response.data['id'])
        assert stored.ip_address == expected

    def test_oversized_forwarded_for_falls_back_to_socket(self, api_client, valid_payload, settings):
        settings.CONTACT_TRUSTED_PROXY_COUNT = 1

        response = submit(api_client, valid_payload, HTTP_X_FORWARDED_FOR='9' * 200)

        assert response.status_code == status.HTTP_201_CREATED
        stored = ContactSubmission.objects.get(pk=response.data['id'])
        assert stored.ip_address == '127.0.0.1'

    @pytest.mark.parametrize('remote_addr', ['', 'not-an-address'])
    def test_missing_client_address_is_stored_as_null(self, api_client, valid_payload, remote_addr):
        response = submit(api_client, valid_payload, REMOTE_ADDR=remote_addr)

        assert response.status_code == status.HTTP_201_CREATED
        stored = ContactSubmission.objects.get(pk=response.data['id'])
        assert stored.ip_address is None

    def test_trailing_slash_is_accepted(self, api_client, valid_payload):
        response = api_client.post('/api/contact/', valid_payload, format='json')
        assert response.status_code == status.HTTP_201_CREATED

    def test_form_encoded_submission(self, api_client, valid_payload):
        response = api_client.post('/api/contact', valid_payload)
        assert response.status_code == status.HTTP_201_CREATED


@pytest.mark.django_db
class TestContactFormValidation:
    """Validation failures are reported per field and never stored."""

    def test_all_fields_missing(self, api_client):
        response = submit(api_client, {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['error'] == 'Validation failed.'
        fields = {d['field']: d['code'] for d in response.data['details']}
        assert fields == {
            'name': 'missing_field',
            'email': 'missing_field',
            'message': 'missing_field',
        }
        assert ContactSubmission.objects.count() == 0

    def test_empty_name_is_reported(self, api_client):
        response = submit(api_client, {'name': '', 'email': 'x@y.com', 'message': 'hi'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['details'] == [
            {'field': 'name', 'code': 'missing_field', 'message': 'Name is required'}
        ]
        assert ContactSubmission.objects.count() == 0

    def test_whitespace_only_message_is_missing(self, api_client):
        response = submit(api_client, {'name': 'A', 'email': 'a@b.com', 'message': '   '})

        assert response.data['details'][0]['field'] == 'message'
        assert response.data['details'][0]['code'] == 'missing_field'

    def test_null_email_is_missing(self, api_client):
        response = submit(api_client, {'name': 'A', 'email': None, 'message': 'hi'})

        assert response.data['details'] == [
            {'field': 'email', 'code': 'missing_field', 'message': 'Email is required'}
        ]

    def test_invalid_email(self, api_client):
        response = submit(api_client, {'name': 'A', 'email': 'invalid-email', 'message': 'hi'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['details'] == [
            {'field': 'email', 'code': 'invalid_email', 'message': 'Invalid email address'}
        ]

    def test_gmail_address_with_empty_mailbox_is_invalid(self, api_client):
        response = submit(api_client, {'name': 'A', 'email': '+tag@gmail.com', 'message': 'hi'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['details'][0]['code'] == 'invalid_email'

    def test_name_too_long(self, api_client):
        response = submit(api_client, {'name': 'a' * 101, 'email': 'a@b.com', 'message': 'hi'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['details'][0]['field'] == 'name'
        assert response.data['details'][0]['code'] == 'field_too_long'

    def test_email_too_long(self, api_client):
        data = {'name': 'A', 'email': 'a' * 300 + '@example.com', 'message': 'hi'}

        response = submit(api_client, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['details'][0]['field'] == 'email'
        assert response.data['details'][0]['code'] == 'field_too_long'
        assert ContactSubmission.objects.count() == 0

    def test_length_limits_are_inclusive(self, api_client):
        data = {'name': 'a' * 100, 'email': 'a@b.com', 'message': 'm' * 1000}

        response = submit(api_client, data)

        assert response.status_code == status.HTTP_201_CREATED

    def test_message_too_long(self, api_client):
        response = submit(api_client, {'name': 'A', 'email': 'a@b.com', 'message': 'm' * 1001})

        assert response.data['details'][0]['field'] == 'message'
        assert response.data['details'][0]['code'] == 'field_too_long'

    def test_length_limit_follows_settings(self, api_client, settings):
        settings.CONTACT_NAME_MAX_LENGTH = 5

        response = submit(api_client, {'name': 'Johnny', 'email': 'a@b.com', 'message': 'hi'})

        assert response.data['details'][0]['message'] == 'Name must be at most 5 characters'

    def test_every_violation_is_reported(self, api_client):
        data = {'name': 'a' * 150, 'email': 'nope', 'message': ''}

        response = submit(api_client, data)

        codes = {d['field']: d['code'] for d in response.data['details']}
        assert codes == {
            'name': 'field_too_long',
            'email': 'invalid_email',
            'message': 'missing_field',
        }

    def test_non_object_body(self, api_client):
        response = submit(api_client, ['not', 'an', 'object'])

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['details'][0]['field'] is None

    def test_malformed_json(self, api_client):
        response = api_client.post(
            '/api/contact', '{"name": ', content_type='application/json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'parse_error'


@pytest.mark.django_db
class TestSubmissionPersistenceFailure:

    def test_database_error_returns_generic_500(self, api_client, valid_payload):
        with patch.object(
            ContactSubmission.objects, 'create',
            side_effect=DatabaseError('disk I/O error at /var/lib/db')
        ):
            response = submit(api_client, valid_payload)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {
            'success': False,
            'error': 'Internal server error.',
            'code': 'persistence_error',
        }
        assert b'disk' not in response.content

    def test_database_error_is_logged(self, api_client, valid_payload, caplog):
        with patch.object(ContactSubmission.objects, 'create', side_effect=DatabaseError('boom')):
            with caplog.at_level(logging.ERROR, logger='contact.views'):
                submit(api_client, valid_payload)

        assert 'Error saving contact submission' in caplog.text


@pytest.mark.django_db
class TestRateLimiting:
    """Test rate limiting for contact form."""

    def test_sixth_submission_is_rate_limited(self, api_client, valid_payload):
        for i in range(5):
            valid_payload['message'] = f'Test message number {i}'
            response = submit(api_client, valid_payload)
            assert response.status_code == status.HTTP_201_CREATED

        response = submit(api_client, valid_payload)

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.data['code'] == 'rate_limited'
        assert int(response['Retry-After']) > 0
        assert response.data['retry_after'] == int(response['Retry-After'])
        assert ContactSubmission.objects.count() == 5

    def test_limit_is_per_client(self, api_client, valid_payload, settings):
        settings.CONTACT_RATE_LIMIT_MAX = 1

        assert submit(api_client, valid_payload).status_code == status.HTTP_201_CREATED
        assert submit(api_client, valid_payload).status_code == status.HTTP_429_TOO_MANY_REQUESTS

        response = submit(api_client, valid_payload, REMOTE_ADDR='10.0.0.2')
        assert response.status_code == status.HTTP_201_CREATED

    def test_rotating_forwarded_for_does_not_evade_limit(self, api_client, valid_payload):
        for i in range(5):
            response = submit(
                api_client, valid_payload, HTTP_X_FORWARDED_FOR=f'198.51.100.{i}'
            )
            assert response.status_code == status.HTTP_201_CREATED

        response = submit(api_client, valid_payload, HTTP_X_FORWARDED_FOR='198.51.100.99')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert ContactSubmission.objects.count() == 5

    def test_clients_without_address_share_a_bucket(self, api_client, valid_payload, settings):
        settings.CONTACT_RATE_LIMIT_MAX = 1

        assert submit(api_client, valid_payload, REMOTE_ADDR='').status_code == status.HTTP_201_CREATED
        response = submit(api_client, valid_payload, REMOTE_ADDR='')
        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS

    def test_invalid_submissions_count_towards_limit(self, api_client, valid_payload, settings):
        settings.CONTACT_RATE_LIMIT_MAX = 2

        submit(api_client, {})
        submit(api_client, {})

        response = submit(api_client, valid_payload)
        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert ContactSubmission.objects.count() == 0

    def test_rate_limit_headers(self, api_client, valid_payload):
        response = submit(api_client, valid_payload)

        assert response['RateLimit-Limit'] == '5'
        assert response['RateLimit-Remaining'] == '4'
        assert int(response['RateLimit-Reset']) > 0

    def test_query_endpoints_are_not_limited(self, api_client, settings):
        settings.CONTACT_RATE_LIMIT_MAX = 1

        for _ in range(3):
            assert api_client.get('/api/contacts').status_code == status.HTTP_200_OK


class TestCacheRateLimiter:

    def test_window_caps_hits(self):
        limiter = CacheRateLimiter(max_count=2, window_seconds=60)

        assert limiter.hit('1.2.3.4', now=120.0) == (True, 1, 60)
        assert limiter.hit('1.2.3.4', now=130.0) == (True, 0, 50)
        assert limiter.hit('1.2.3.4', now=140.0) == (False, 0, 40)

    def test_counter_resets_when_window_expires(self):
        limiter = CacheRateLimiter(max_count=1, window_seconds=60)

        limiter.hit('1.2.3.4', now=120.0)
        assert limiter.hit('1.2.3.4', now=150.0)[0] is False
        assert limiter.hit('1.2.3.4', now=180.0)[0] is True

    def test_reset_clears_current_window(self):
        limiter = CacheRateLimiter(max_count=1, window_seconds=60)

        limiter.hit('1.2.3.4', now=120.0)
        limiter.reset('1.2.3.4', now=125.0)

        assert limiter.hit('1.2.3.4', now=130.0)[0] is True


@pytest.mark.django_db
class TestContactListView:

    def test_empty_store_returns_empty_list(self, api_client):
        response = api_client.get('/api/contacts')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'contacts': [], 'total': 0}

    def test_lists_all_most_recent_first(self, api_client, valid_payload):
        ids = [submit(api_client, valid_payload).data['id'] for _ in range(3)]

        response = api_client.get('/api/contacts')

        assert response.data['total'] == 3
        assert [c['id'] for c in response.data['contacts']] == list(reversed(ids))
        timestamps = [parse_datetime(c['timestamp']) for c in response.data['contacts']]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_contact_fields(self, api_client, sample_submission):
        response = api_client.get('/api/contacts/')

        contact = response.data['contacts'][0]
        assert set(contact) == {
            'id', 'name', 'email', 'message', 'timestamp',
            'ip_address', 'user_agent', 'status'
        }

    def test_filter_by_status(self, api_client, sample_submission):
        ContactSubmission.objects.create(
            name='Other', email='other@example.com', message='hello', status='archived'
        )

        response = api_client.get('/api/contacts?status=archived')

        assert response.data['total'] == 1
        assert response.data['contacts'][0]['name'] == 'Other'

    def test_unknown_status_filter_is_rejected(self, api_client, sample_submission):
        response = api_client.get('/api/contacts?status=deleted')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False

    def test_database_error_returns_500(self, api_client):
        with patch.object(ContactListView, 'get_queryset', side_effect=DatabaseError('gone')):
            response = api_client.get('/api/contacts')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['code'] == 'persistence_error'
        assert 'gone' not in response.data['error']


@pytest.mark.django_db
class TestContactDetailView:

    def test_get_contact(self, api_client, sample_submission):
        response = api_client.get(f'/api/contacts/{sample_submission.id}')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == sample_submission.id
        assert response.data['name'] == 'Jane Roe'
        assert response.data['email'] == 'jane@example.com'
        assert response.data['ip_address'] == '192.168.1.1'
        assert response.data['status'] == 'new'

    def test_unknown_id_is_not_found(self, api_client):
        response = api_client.get('/api/contacts/999999')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {
            'success': False,
            'error': 'Contact not found.',
            'code': 'not_found',
        }

    def test_non_numeric_id_is_unknown_route(self, api_client):
        response = api_client.get('/api/contacts/abc')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['code'] == 'unknown_route'


@pytest.mark.django_db
class TestContactStatusUpdate:

    def test_update_status(self, api_client, sample_submission):
        response = api_client.patch(
            f'/api/contacts/{sample_submission.id}/status', {'status': 'replied'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['status'] == 'replied'
        sample_submission.refresh_from_db()
        assert sample_submission.status == 'replied'

        detail = api_client.get(f'/api/contacts/{sample_submission.id}')
        assert detail.data['status'] == 'replied'

    def test_update_keeps_other_fields(self, api_client, sample_submission):
        original_timestamp = sample_submission.timestamp

        api_client.patch(
            f'/api/contacts/{sample_submission.id}/status', {'status': 'read'}, format='json'
        )

        sample_submission.refresh_from_db()
        assert sample_submission.timestamp == original_timestamp
        assert sample_submission.name == 'Jane Roe'

    @pytest.mark.parametrize('bad_status', ['deleted', 'NEW', '', None])
    def test_invalid_status_is_rejected(self, api_client, sample_submission, bad_status):
        response = api_client.patch(
            f'/api/contacts/{sample_submission.id}/status', {'status': bad_status}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_status'
        sample_submission.refresh_from_db()
        assert sample_submission.status == 'new'

    def test_missing_status_is_rejected(self, api_client, sample_submission):
        response = api_client.patch(
            f'/api/contacts/{sample_submission.id}/status', {}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_status'

    def test_unknown_id_is_not_found(self, api_client):
        response = api_client.patch('/api/contacts/424242/status', {'status': 'read'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'

    def test_status_is_checked_before_lookup(self, api_client):
        response = api_client.patch('/api/contacts/424242/status', {'status': 'bogus'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_post_is_not_allowed(self, api_client, sample_submission):
        response = api_client.post(
            f'/api/contacts/{sample_submission.id}/status', {'status': 'read'}, format='json'
        )

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert response.data['code'] == 'method_not_allowed'


@pytest.mark.django_db
class TestAdminApiKey:

    def test_key_required_when_configured(self, api_client, settings, sample_submission):
        settings.CONTACT_ADMIN_API_KEY = 's3cret'

        assert api_client.get('/api/contacts').status_code == status.HTTP_403_FORBIDDEN
        assert api_client.get(
            f'/api/contacts/{sample_submission.id}', HTTP_X_API_KEY='wrong'
        ).status_code == status.HTTP_403_FORBIDDEN

        response = api_client.get('/api/contacts', HTTP_X_API_KEY='s3cret')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 1

    def test_status_update_requires_key(self, api_client, settings, sample_submission):
        settings.CONTACT_ADMIN_API_KEY = 's3cret'

        response = api_client.patch(
            f'/api/contacts/{sample_submission.id}/status', {'status': 'read'}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        sample_submission.refresh_from_db()
        assert sample_submission.status == 'new'

    def test_submission_stays_public(self, api_client, settings, valid_payload):
        settings.CONTACT_ADMIN_API_KEY = 's3cret'

        assert submit(api_client, valid_payload).status_code == status.HTTP_201_CREATED


class TestNormalizeEmail:

    @pytest.mark.parametrize('raw, expected', [
        ('JOHN@Example.com ', 'john@example.com'),
        ('John.Smith+news@gmail.com', 'johnsmith@gmail.com'),
        ('j.s@GoogleMail.com', 'js@gmail.com'),
        ('someone+tag@outlook.com', 'someone@outlook.com'),
        ('someone+tag@icloud.com', 'someone@icloud.com'),
        ('someone-tag@yahoo.com', 'someone@yahoo.com'),
        ('someone@ya.ru', 'someone@yandex.ru'),
        ('first.last+x@example.org', 'first.last+x@example.org'),
    ])
    def test_normalization(self, raw, expected):
        assert normalize_email(raw) == expected

    @pytest.mark.parametrize('raw', [
        'JOHN@Example.com',
        'John.Smith+news@gmail.com',
        'a-b-c@yahoo.com',
        'x+y+z@hotmail.com',
    ])
    def test_idempotent(self, raw):
        once = normalize_email(raw)
        assert normalize_email(once) == once

    @pytest.mark.parametrize('raw', ['no-at-sign', '@example.com', 'user@', '+x@gmail.com'])
    def test_rejects_unusable_addresses(self, raw):
        with pytest.raises(ValueError):
            normalize_email(raw)


class TestSanitizeText:

    def test_trims_and_escapes(self):
        assert sanitize_text('  <i>"hi"</i> ') == '&lt;i&gt;&quot;hi&quot;&lt;/i&gt;'


class TestContactSubmissionSerializer:

    def test_validated_data_is_sanitized(self):
        serializer = ContactSubmissionSerializer(data={
            'name': ' Ann ', 'email': ' ANN@EXAMPLE.COM', 'message': ' a < b ',
        })

        assert serializer.is_valid()
        assert serializer.validated_data == {
            'name': 'Ann', 'email': 'ann@example.com', 'message': 'a &lt; b',
        }

    def test_violations_list_one_entry_per_field(self):
        serializer = ContactSubmissionSerializer(data={'email': 'bad'})

        assert not serializer.is_valid()
        assert sorted(d['field'] for d in serializer.violations()) == ['email', 'message', 'name']


@pytest.mark.django_db
class TestSignals:

    def test_new_submission_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger='contact.signals'):
            submission = ContactSubmission.objects.create(
                name='Log Me', email='log@example.com', message='hello'
            )

        assert f'saved with ID: {submission.pk}' in caplog.text


@pytest.mark.django_db
class TestContactSubmissionAdmin:

    def test_submissions_cannot_be_added_or_deleted(self, sample_submission):
        model_admin = ContactSubmissionAdmin(ContactSubmission, admin.site)
        request = RequestFactory().get('/admin/contact/contactsubmission/')

        assert model_admin.has_add_permission(request) is False
        assert model_admin.has_delete_permission(request, sample_submission) is False

    def test_mark_as_archived_action(self, sample_submission):
        model_admin = ContactSubmissionAdmin(ContactSubmission, admin.site)
        request = RequestFactory().post('/admin/contact/contactsubmission/')

        with patch.object(model_admin, 'message_user') as message_user:
            model_admin.mark_as_archived(request, ContactSubmission.objects.all())

        sample_submission.refresh_from_db()
        assert sample_submission.status == 'archived'
        message_user.assert_called_once()


@pytest.mark.django_db
class TestCheckStoreCommand:

    def test_ready_store(self):
        out = StringIO()
        call_command('checkstore', stdout=out)
        assert 'Contact store is ready' in out.getvalue()

    def test_missing_table_fails(self):
        with patch.object(connection.introspection, 'table_names', return_value=[]):
            with pytest.raises(CommandError, match='contact_submissions'):
                call_command('checkstore')

    def test_unreachable_database_fails(self):
        with patch.object(
            connections['default'], 'ensure_connection',
            side_effect=OperationalError('connection refused')
        ):
            with pytest.raises(CommandError, match='connection refused'):
                call_command('checkstore')
