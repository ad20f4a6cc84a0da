# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework.views import APIView

from tracker.responses import created_response, success_response
from tracker.selectors import user_selector
from tracker.serializers.user_serializer import (
    ProfileUpdateSerializer,
    UserCreateSerializer,
    UserSerializer,
    UserUpdateSerializer,
)
from tracker.services import user_service
from .utils import CONFLICT, UPLOAD_PARSERS, envelope, extend_schema, path_int, q_str, std_errors


class CurrentUserView(APIView):
    @extend_schema(
        tags=["Users"],
        summary="Current user",
        responses={200: envelope("CurrentUserResponse", UserSerializer), **std_errors()},
    )
    def get(self, request):
        return success_response("User retrieved successfully", UserSerializer(request.user).data)


class ProfileView(APIView):
    parser_classes = UPLOAD_PARSERS

    @extend_schema(
        tags=["Users"],
        summary="Update own profile (role cannot be changed here)",
        request=ProfileUpdateSerializer,
        responses={200: envelope("ProfileResponse", UserSerializer), **std_errors(CONFLICT)},
    )
    def patch(self, request):
        s = ProfileUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = user_service.update_profile(
            actor=request.user, data=s.validated_data, picture=request.FILES.get("picture")
        )
        return success_response("Profile updated successfully", UserSerializer(user).data)


class UserListCreateView(APIView):
    """
    GET: users the caller may see (admin: manager/qa/developer, manager: qa/developer, qa: developer)
    POST: create an account of a role the caller manages
    """
    parser_classes = UPLOAD_PARSERS

    @extend_schema(
        tags=["Users"],
        summary="List users visible to the caller",
        parameters=[q_str("role", "Only users of this role")],
        responses={200: envelope("UserListResponse", UserSerializer, many=True), **std_errors()},
    )
    def get(self, request):
        users = user_selector.list_users(request.user, role=request.query_params.get("role"))
        return success_response("Users retrieved successfully", UserSerializer(users, many=True).data)

    @extend_schema(
        tags=["Users"],
        summary="Create a user",
        request=UserCreateSerializer,
        responses={201: envelope("UserCreateResponse", UserSerializer), **std_errors(CONFLICT)},
    )
    def post(self, request):
        s = UserCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = user_service.create_user(
            actor=request.user, picture=request.FILES.get("picture"), **s.validated_data
        )
        return created_response("User created successfully", UserSerializer(user).data)


class UserDetailView(APIView):
    parser_classes = UPLOAD_PARSERS

    @extend_schema(
        tags=["Users"],
        summary="Get a user",
        parameters=[path_int("user_id", "User ID")],
        responses={200: envelope("UserDetailResponse", UserSerializer), **std_errors()},
    )
    def get(self, request, user_id: int):
        user = user_selector.get_visible_user(request.user, user_id)
        return success_response("User retrieved successfully", UserSerializer(user).data)

    @extend_schema(
        tags=["Users"],
        summary="Update a user",
        parameters=[path_int("user_id", "User ID")],
        request=UserUpdateSerializer,
        responses={200: envelope("UserUpdateResponse", UserSerializer), **std_errors(CONFLICT)},
    )
    def patch(self, request, user_id: int):
        s = UserUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = user_service.update_user(
            actor=request.user, user_id=user_id, data=s.validated_data,
            picture=request.FILES.get("picture"),
        )
        return success_response("User updated successfully", UserSerializer(user).data)

    @extend_schema(
        tags=["Users"],
        summary="Delete a user",
        parameters=[path_int("user_id", "User ID")],
        responses={200: envelope("UserDeleteResponse"), **std_errors(CONFLICT)},
    )
    def delete(self, request, user_id: int):
        user_service.delete_user(actor=request.user, user_id=user_id)
        return success_response("User deleted successfully")
