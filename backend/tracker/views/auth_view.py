# -*- coding: utf-8 -*-
"""
Public auth endpoints: signup, login, forgot-password, reset-password.
"""
from __future__ import annotations
from rest_framework import permissions
from rest_framework.parsers import JSONParser
from rest_framework.views import APIView

from tracker.responses import created_response, success_response
from tracker.serializers.user_serializer import (
    ForgotPasswordSerializer,
    LoginResultSerializer,
    LoginSerializer,
    ResetPasswordSerializer,
    SignupSerializer,
    UserSerializer,
)
from tracker.services import auth_service
from .utils import CONFLICT, UPLOAD_PARSERS, envelope, extend_schema, std_errors


class _PublicView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    parser_classes = [JSONParser]


class SignupView(_PublicView):
    parser_classes = UPLOAD_PARSERS

    @extend_schema(
        tags=["Auth"],
        summary="Self-register (role defaults to manager; admin is not allowed)",
        request=SignupSerializer,
        responses={201: envelope("SignupResponse", UserSerializer), **std_errors(CONFLICT)},
    )
    def post(self, request):
        s = SignupSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = auth_service.signup(picture=request.FILES.get("picture"), **s.validated_data)
        return created_response("User registered successfully", UserSerializer(user).data)


class LoginView(_PublicView):
    @extend_schema(
        tags=["Auth"],
        summary="Exchange email + password for a bearer token",
        request=LoginSerializer,
        responses={200: envelope("LoginResponse", LoginResultSerializer), **std_errors()},
    )
    def post(self, request):
        s = LoginSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        result = auth_service.login(**s.validated_data)
        return success_response("Login successful", LoginResultSerializer(result).data)


class ForgotPasswordView(_PublicView):
    @extend_schema(
        tags=["Auth"],
        summary="Issue a password reset token",
        description="The token is handed to the delivery hook; it is echoed in `data.resetToken` only in DEBUG.",
        request=ForgotPasswordSerializer,
        responses={200: envelope("ForgotPasswordResponse"), **std_errors()},
    )
    def post(self, request):
        s = ForgotPasswordSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        token = auth_service.forgot_password(**s.validated_data)
        data = {"resetToken": token} if token else None
        return success_response("Password reset instructions sent", data)


class ResetPasswordView(_PublicView):
    @extend_schema(
        tags=["Auth"],
        summary="Set a new password with a reset token",
        request=ResetPasswordSerializer,
        responses={200: envelope("ResetPasswordResponse"), **std_errors()},
    )
    def post(self, request):
        s = ResetPasswordSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        auth_service.reset_password(**s.validated_data)
        return success_response("Password reset successfully")
