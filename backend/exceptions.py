"""
REST framework exception handler that reports errors as {"error": ...}.
"""
import logging

from rest_framework import exceptions, status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.NotAuthenticated):
        response.data = {'error': 'Unauthorized access'}
    elif isinstance(exc, exceptions.AuthenticationFailed):
        response.data = {'error': 'Invalid or expired token'}
    elif isinstance(exc, exceptions.ValidationError):
        response.data = {'error': 'Invalid input', 'details': response.data}
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'error': str(response.data['detail'])}

    if response.status_code == status.HTTP_401_UNAUTHORIZED:
        logger.warning(f"Rejected unauthenticated request to {context['request'].path}")

    return response
