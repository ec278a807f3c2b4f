import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

logger = logging.getLogger(__name__)


@require_GET
def health(request):
    """Liveness check. Stays 200 when the database is down so the mock fallback can serve."""
    database = 'connected'
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError as e:
        logger.warning("Health check could not reach the database: %s", e)
        database = 'unavailable'

    return JsonResponse({
        'status': 'OK',
        'timestamp': timezone.now().isoformat(),
        'database': database,
    })


def route_not_found(request, exception=None):
    return JsonResponse({'success': False, 'error': 'Route not found'}, status=404)
