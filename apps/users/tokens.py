# apps/users/tokens.py
"""
Password reset tokens.

Tokens live in the Django cache as ``token -> {user_id, expires_at}`` with an
explicit TTL. The store is process-local when the default local-memory cache
is configured, so outstanding tokens do not survive a restart.
"""
import secrets
from datetime import timedelta

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

KEY_PREFIX = 'password_reset:'


class PasswordResetTokenStore:
    def __init__(self, ttl=None, backend=None):
        self.ttl = ttl if ttl is not None else settings.PASSWORD_RESET_TOKEN_TTL
        self.backend = backend or cache

    def _key(self, token):
        return f"{KEY_PREFIX}{token}"

    def issue(self, user):
        token = secrets.token_hex(32)
        entry = {
            'user_id': user.pk,
            'expires_at': timezone.now() + timedelta(seconds=self.ttl),
        }
        self.backend.set(self._key(token), entry, timeout=self.ttl)
        return token

    def lookup(self, token):
        """Return the user id for a live token, or None if unknown or expired."""
        entry = self.backend.get(self._key(token))
        if not entry:
            return None
        if entry['expires_at'] <= timezone.now():
            self.backend.delete(self._key(token))
            return None
        return entry['user_id']

    def consume(self, token):
        user_id = self.lookup(token)
        if user_id is not None:
            self.backend.delete(self._key(token))
        return user_id


reset_tokens = PasswordResetTokenStore()
