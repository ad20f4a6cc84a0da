# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework import serializers

from tracker.models import Bug
from tracker.serializers.fields import BlankableDateTimeField
from tracker.serializers.user_serializer import UserBriefSerializer
from tracker.uploads import blob_payload


class BugSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="bug_type", read_only=True)
    projectId = serializers.SerializerMethodField()
    createdBy = UserBriefSerializer(source="created_by", read_only=True)
    assignedTo = UserBriefSerializer(source="assigned_to", read_only=True)
    screenshot = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Bug
        fields = [
            "id",
            "title",
            "type",
            "status",
            "description",
            "deadline",
            "projectId",
            "createdBy",
            "assignedTo",
            "screenshot",
            "createdAt",
            "updatedAt",
        ]

    def get_projectId(self, obj):
        return {"id": obj.project_id, "name": obj.project.name}

    def get_screenshot(self, obj):
        return blob_payload(obj.screenshot_data, obj.screenshot_content_type)


class BugCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    type = serializers.ChoiceField(source="bug_type", choices=Bug.BugType.choices)
    projectId = serializers.IntegerField(source="project_id")
    description = serializers.CharField(required=False, allow_blank=True, default="")
    deadline = BlankableDateTimeField(required=False, allow_null=True, default=None)
    status = serializers.ChoiceField(choices=Bug.Status.choices, required=False, allow_blank=True)
    assignedTo = serializers.IntegerField(source="assigned_to_id", required=False, allow_null=True)


class BugUpdateSerializer(serializers.Serializer):
    """Omitted keys keep the stored value; blank title / type are ignored."""
    title = serializers.CharField(max_length=255, required=False, allow_blank=True)
    type = serializers.ChoiceField(source="bug_type", choices=Bug.BugType.choices, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=Bug.Status.choices, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    deadline = BlankableDateTimeField(required=False, allow_null=True)
    assignedTo = serializers.IntegerField(source="assigned_to_id", required=False, allow_null=True)


class BugStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Bug.Status.choices)


class BugReassignSerializer(serializers.Serializer):
    assignedTo = serializers.IntegerField(source="assigned_to_id")
