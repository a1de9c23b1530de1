import traceback
import logging
from django.conf import settings
from django.http import JsonResponse

logger = logging.getLogger(__name__)


class JSONExceptionMiddleware:
    """
    Turns exceptions that escape a view into a JSON 500 response.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        return response

    def process_exception(self, request, exception):
        logger.error(f"500 Error on {request.method} {request.path}: {str(exception)}")
        logger.error(f"Traceback: {traceback.format_exc()}")

        body = {
            "error": "Internal Server Error",
            "path": request.path,
        }
        if settings.DEBUG:
            body["message"] = str(exception)

        return JsonResponse(body, status=500)

