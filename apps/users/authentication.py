# apps/users/authentication.py
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from django.contrib.auth import get_user_model
import logging

logger = logging.getLogger(__name__)
User = get_user_model()


class CustomJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that rejects disabled accounts and logs failures.
    """

    def get_user(self, validated_token):
        try:
            user = super().get_user(validated_token)
        except InvalidToken:
            logger.warning("Token is valid but user no longer exists")
            raise

        if not user.is_active:
            logger.warning(f"Inactive user attempted authentication: {user.email}")
            raise InvalidToken("User account is disabled")

        logger.debug(f"Authenticated {user.email} (role: {user.role})")
        return user

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except Exception as e:
            logger.info(f"Authentication exception: {str(e)}")
            raise
