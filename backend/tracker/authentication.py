# ============================================
# tracker/authentication.py
# ============================================
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from tracker.exceptions import AuthenticationError
from tracker.repositories import user_repository
from tracker.services.token_service import get_token_service


class BearerTokenAuthentication(BaseAuthentication):
    """
    Authorization: Bearer <jwt>

    Returns None when no bearer header is present so IsAuthenticated answers 401.
    """
    keyword = 'Bearer'

    def authenticate(self, request):
        parts = get_authorization_header(request).split()
        if not parts or parts[0].lower() != self.keyword.lower().encode():
            return None
        if len(parts) != 2:
            raise AuthenticationError("Unauthorized: Invalid token")

        try:
            token = parts[1].decode()
        except UnicodeError:
            raise AuthenticationError("Unauthorized: Invalid token")

        claims = get_token_service().verify(token)
        user = user_repository.get_or_none(claims.get('sub'))
        if user is None or not user.is_active:
            raise AuthenticationError("User not found")
        return user, claims

    def authenticate_header(self, request):
        return self.keyword
