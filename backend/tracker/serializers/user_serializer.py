# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework import serializers

from tracker.models import User
from tracker.policies.roles import Role
from tracker.uploads import blob_payload


class UserBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "firstname", "lastname", "email", "role"]


class UserSerializer(serializers.ModelSerializer):
    picture = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = User
        fields = ["id", "firstname", "lastname", "email", "role", "picture", "createdAt"]

    def get_picture(self, obj):
        return blob_payload(obj.picture_data, obj.picture_content_type)


# ===== Auth =====
class SignupSerializer(serializers.Serializer):
    firstname = serializers.CharField(max_length=150)
    lastname = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    role = serializers.ChoiceField(choices=Role.choices, required=False, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()


class ResetPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()
    newPassword = serializers.CharField(source="new_password", write_only=True, trim_whitespace=False)
    token = serializers.CharField()


class LoginResultSerializer(serializers.Serializer):
    token = serializers.CharField()
    user = UserSerializer()


# ===== Admin writes =====
class UserCreateSerializer(SignupSerializer):
    role = serializers.ChoiceField(choices=Role.choices)


class UserUpdateSerializer(serializers.Serializer):
    """Blank firstname / email are ignored by the service; lastname may be cleared."""
    firstname = serializers.CharField(max_length=150, required=False, allow_blank=True)
    lastname = serializers.CharField(max_length=150, required=False, allow_blank=True)
    email = serializers.EmailField(max_length=255, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=Role.choices, required=False, allow_blank=True)


class ProfileUpdateSerializer(UserUpdateSerializer):
    pass
