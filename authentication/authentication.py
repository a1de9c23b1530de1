from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
import jwt
import logging

from .tokens import decode_token

logger = logging.getLogger(__name__)
User = get_user_model()


class JWTAuthentication(BaseAuthentication):
    """
    JWT Authentication for Django REST Framework

    Reads a "Bearer <token>" Authorization header, verifies the token and
    loads the user it names.
    """

    def authenticate(self, request):
        """
        Authenticate the request using a JWT access token.

        Returns:
            tuple: (user, payload) if authentication successful, None if no
            bearer token was sent
        """
        auth_header = request.META.get('HTTP_AUTHORIZATION')

        if not auth_header:
            return None

        token = self.extract_token(auth_header)
        if not token:
            return None

        try:
            payload = decode_token(token)
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired access token")
            raise AuthenticationFailed('Invalid or expired token')
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid access token: {e}")
            raise AuthenticationFailed('Invalid or expired token')

        try:
            user = User.objects.get(id=payload['id'])
        except (User.DoesNotExist, ValueError, TypeError):
            raise AuthenticationFailed('Invalid or expired token')

        if not user.is_active:
            raise AuthenticationFailed('Invalid or expired token')

        return (user, payload)

    def extract_token(self, auth_header):
        """
        Extract token from Authorization header.

        Args:
            auth_header (str): Authorization header value

        Returns:
            str: Token if found, None otherwise
        """
        parts = auth_header.split()

        if len(parts) != 2 or parts[0].lower() != 'bearer':
            return None

        return parts[1]

    def authenticate_header(self, request):
        """
        Return the authentication header for 401 responses.
        """
        return 'Bearer'
