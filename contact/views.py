"""
Contact Views

API endpoints for contact form submission and submission management.
"""
import logging

from django.db import DatabaseError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import (
    ContactNotFound,
    ContactValidationError,
    InvalidStatus,
    PersistenceError,
)
from .filters import ContactSubmissionFilter
from .models import ContactSubmission
from .permissions import HasContactAdminKey
from .rate_limiting import get_client_ip, rate_limit_contact_form
from .serializers import (
    ContactStatusUpdateSerializer,
    ContactSubmissionDetailSerializer,
    ContactSubmissionSerializer,
)

logger = logging.getLogger(__name__)


class ContactSubmitView(APIView):
    """
    Public endpoint for contact form submissions.

    POST /api/contact

    No authentication required. Rate limited per client IP.
    """

    permission_classes = [AllowAny]

    @rate_limit_contact_form
    def post(self, request):
        """Validate, store and acknowledge one submission."""
        serializer = ContactSubmissionSerializer(data=request.data)

        if not serializer.is_valid():
            details = serializer.violations()
            logger.warning(
                "Contact submission rejected: %s",
                ', '.join(f"{d['field']}={d['code']}" for d in details)
            )
            raise ContactValidationError(details)

        user_agent = request.META.get('HTTP_USER_AGENT')
        try:
            submission = ContactSubmission.objects.create(
                name=serializer.validated_data['name'],
                email=serializer.validated_data['email'],
                message=serializer.validated_data['message'],
                ip_address=get_client_ip(request),
                user_agent=user_agent[:500] if user_agent else None,
            )
        except DatabaseError as exc:
            logger.exception("Error saving contact submission")
            raise PersistenceError() from exc

        return Response(
            {
                'success': True,
                'message': 'Message submitted successfully!',
                'id': submission.id,
            },
            status=status.HTTP_201_CREATED
        )


class ContactListView(generics.ListAPIView):
    """
    List all submissions, most recent first.

    GET /api/contacts

    Query Parameters:
    - status: Filter by status (new, read, replied, archived)
    """

    permission_classes = [HasContactAdminKey]
    serializer_class = ContactSubmissionDetailSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = ContactSubmissionFilter
    pagination_class = None

    def get_queryset(self):
        return ContactSubmission.objects.order_by('-timestamp', '-id')

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        contacts = self.get_serializer(queryset, many=True).data
        return Response({'contacts': contacts, 'total': len(contacts)})


class ContactDetailView(APIView):
    """
    Get a single submission.

    GET /api/contacts/:id
    """

    permission_classes = [HasContactAdminKey]

    def get(self, request, pk):
        try:
            submission = ContactSubmission.objects.get(pk=pk)
        except ContactSubmission.DoesNotExist:
            raise ContactNotFound()

        return Response(ContactSubmissionDetailSerializer(submission).data)


class ContactStatusUpdateView(APIView):
    """
    Change the status of a submission.

    PATCH /api/contacts/:id/status

    The status is checked before the store is touched; only the status
    column of the matching row is written.
    """

    permission_classes = [HasContactAdminKey]

    def patch(self, request, pk):
        serializer = ContactStatusUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            raise InvalidStatus(
                "Invalid status. Must be one of: "
                f"{', '.join(ContactSubmission.Status.values)}."
            )

        new_status = serializer.validated_data['status']
        updated = ContactSubmission.objects.filter(pk=pk).update(status=new_status)
        if not updated:
            raise ContactNotFound()

        logger.info("Contact submission %s marked as %s", pk, new_status)

        return Response({
            'success': True,
            'message': 'Status updated successfully.',
            'id': int(pk),
            'status': new_status,
        })
