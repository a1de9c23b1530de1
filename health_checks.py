"""
Health check endpoints for monitoring system health
"""
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from django.utils import timezone
from django.db import connection, DatabaseError
from courses.models import Course, ProjectSubmission
from student.models import Enrollment
import logging

logger = logging.getLogger(__name__)


@require_http_methods(["GET"])
def health_check(request):
    """Liveness probe, does not touch the database"""
    return JsonResponse({'status': 'ok'})


@require_http_methods(["GET"])
def database_health_check(request):
    """Check the database round trip and report table counts"""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return JsonResponse({
            'status': 'healthy',
            'timestamp': timezone.now().isoformat(),
            'database': 'connected',
            'counts': {
                'courses': Course.objects.count(),
                'enrollments': Enrollment.objects.count(),
                'submissions': ProjectSubmission.objects.count(),
            }
        })
    except DatabaseError as e:
        logger.error(f"Database health check failed: {e}")
        return JsonResponse({
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat()
        }, status=500)
