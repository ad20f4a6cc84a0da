# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework import serializers

from tracker.models import Project
from tracker.serializers.fields import IdListField
from tracker.serializers.user_serializer import UserBriefSerializer
from tracker.uploads import blob_payload


class ProjectSerializer(serializers.ModelSerializer):
    picture = serializers.SerializerMethodField()
    createdBy = UserBriefSerializer(source="created_by", read_only=True)
    qaAssigned = UserBriefSerializer(source="qa_members", many=True, read_only=True)
    developersAssigned = UserBriefSerializer(source="developer_members", many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Project
        fields = [
            "id",
            "name",
            "description",
            "picture",
            "createdBy",
            "qaAssigned",
            "developersAssigned",
            "createdAt",
            "updatedAt",
        ]

    def get_picture(self, obj):
        return blob_payload(obj.picture_data, obj.picture_content_type)


class ProjectCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    qaAssigned = IdListField(source="qa_ids", required=False, default=list)
    developersAssigned = IdListField(source="developer_ids", required=False, default=list)


class ProjectUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    qaAssigned = IdListField(source="qa_ids", required=False)
    developersAssigned = IdListField(source="developer_ids", required=False)


class AssignQASerializer(serializers.Serializer):
    qaIds = IdListField(source="qa_ids", allow_empty=False)


class AssignDevelopersSerializer(serializers.Serializer):
    developerIds = IdListField(source="developer_ids", allow_empty=False)
