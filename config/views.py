import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger('apps')


def health_check(request):
    """Liveness check; also confirms the database answers."""
    try:
        connection.ensure_connection()
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        return JsonResponse({'status': 'unavailable', 'database': 'down'}, status=503)
    return JsonResponse({'status': 'ok', 'database': 'up'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
