# tracker/services/token_service.py
import time
from functools import lru_cache
from typing import Dict

import jwt
from django.conf import settings
from django.utils.crypto import constant_time_compare, salted_hmac

from tracker.exceptions import AuthenticationError

ACCESS_PURPOSE = "access"
RESET_PURPOSE = "password_reset"


class TokenService:
    """Issues and verifies signed JWTs. Configuration is fixed at construction."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 86400,
                 reset_ttl_seconds: int = 900):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl_seconds = int(ttl_seconds)
        self.reset_ttl_seconds = int(reset_ttl_seconds)

    def _encode(self, payload: dict, ttl: int) -> str:
        now = int(time.time())
        payload = dict(payload, iat=now, exp=now + ttl)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def _decode(self, token: str, purpose: str) -> Dict:
        if not token:
            raise AuthenticationError("Unauthorized: No token provided")
        try:
            data = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")
        if data.get("purpose") != purpose or "sub" not in data:
            raise AuthenticationError("Invalid token")
        return data

    def issue(self, user) -> str:
        return self._encode(
            {"sub": str(user.id), "role": user.role, "purpose": ACCESS_PURPOSE},
            self.ttl_seconds,
        )

    def verify(self, token: str) -> Dict:
        return self._decode(token, ACCESS_PURPOSE)

    @staticmethod
    def _password_fingerprint(user) -> str:
        # Changes whenever the password hash does, so a used token stops verifying.
        return salted_hmac("tracker.password_reset", user.password).hexdigest()[:32]

    def issue_reset(self, user) -> str:
        return self._encode(
            {
                "sub": str(user.id),
                "email": user.email.lower(),
                "pwd": self._password_fingerprint(user),
                "purpose": RESET_PURPOSE,
            },
            self.reset_ttl_seconds,
        )

    def verify_reset(self, token: str, user) -> Dict:
        data = self._decode(token, RESET_PURPOSE)
        if str(data.get("sub")) != str(user.id) or data.get("email") != user.email.lower():
            raise AuthenticationError("Invalid token")
        if not constant_time_compare(data.get("pwd", ""), self._password_fingerprint(user)):
            raise AuthenticationError("Invalid token")
        return data


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    return TokenService(
        secret=settings.JWT_SECRET,
        algorithm=getattr(settings, "JWT_ALGO", "HS256"),
        ttl_seconds=getattr(settings, "JWT_TTL_SECONDS", 86400),
        reset_ttl_seconds=getattr(settings, "PASSWORD_RESET_TTL_SECONDS", 900),
    )
