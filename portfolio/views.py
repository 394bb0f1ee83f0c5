"""
Project-level views: health check and JSON error pages.
"""
import time

from django.http import JsonResponse
from django.utils import timezone
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from portfolio import PROCESS_STARTED_AT


class HealthCheckView(APIView):
    """
    GET /api/health

    Liveness probe. Never touches the database.
    """

    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            'status': 'ok',
            'timestamp': timezone.now().isoformat(),
            'uptime': round(time.monotonic() - PROCESS_STARTED_AT, 3),
        })


def not_found(request, exception=None):
    """JSON replacement for Django's 404 page."""
    return JsonResponse(
        {'success': False, 'error': 'Not found.', 'code': 'unknown_route'},
        status=404
    )


def server_error(request):
    """JSON replacement for Django's 500 page."""
    return JsonResponse(
        {'success': False, 'error': 'Internal server error.', 'code': 'server_error'},
        status=500
    )
