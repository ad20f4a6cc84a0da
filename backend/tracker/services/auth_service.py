# -*- coding: utf-8 -*-
"""
Signup / login / password reset.
Password hashing goes through Django's hashers (User.set_password / check_password).
"""
from __future__ import annotations
from typing import Any, Dict, Optional
import logging

from django.conf import settings

from tracker.exceptions import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from tracker.models import User
from tracker.policies.roles import Role, parse_role
from tracker.repositories import user_repository as repo
from tracker.services.token_service import get_token_service
from tracker.uploads import read_image

logger = logging.getLogger(__name__)

SELF_REGISTER_ROLES = (Role.MANAGER, Role.QA, Role.DEVELOPER)


def signup(*, firstname: str, email: str, password: str, lastname: str = "",
           role: Optional[str] = None, picture=None) -> User:
    role = parse_role(role) if role else Role.MANAGER
    if role is None:
        raise ValidationError("Invalid role. Must be one of: admin, manager, qa, developer")
    if role not in SELF_REGISTER_ROLES:
        raise AuthorizationError(f"Access denied: {role} accounts cannot be self-registered")
    if repo.email_taken(email):
        raise ConflictError("User with this email already exists")

    data: Dict[str, Any] = {
        "firstname": firstname,
        "lastname": lastname or "",
        "email": email,
        "role": role,
    }
    if picture is not None:
        data["picture_data"], data["picture_content_type"] = read_image(picture)

    user = repo.create(data, password)
    logger.info("[auth] signup id=%s role=%s", user.id, user.role)
    return user


def login(*, email: str, password: str) -> Dict[str, Any]:
    user = repo.get_by_email(email)
    if user is None or not user.is_active or not user.check_password(password):
        logger.info("[auth] login failed for email=%s", email)
        raise AuthenticationError("Invalid email or password")
    token = get_token_service().issue(user)
    logger.info("[auth] login id=%s", user.id)
    return {"token": token, "user": user}


def deliver_reset_token(user: User, token: str) -> None:
    """Hand-off point for mail delivery; only records the event here."""
    logger.info("[auth] password reset requested for id=%s", user.id)


def forgot_password(*, email: str) -> Optional[str]:
    user = repo.get_by_email(email)
    if user is None:
        raise ValidationError("Email not found in our database")
    token = get_token_service().issue_reset(user)
    deliver_reset_token(user, token)
    return token if settings.DEBUG else None


def reset_password(*, email: str, new_password: str, token: str) -> User:
    user = repo.get_by_email(email)
    if user is None:
        raise ValidationError("Email not found in our database")
    get_token_service().verify_reset(token, user)
    repo.set_password(user, new_password)
    logger.info("[auth] password reset id=%s", user.id)
    return user
