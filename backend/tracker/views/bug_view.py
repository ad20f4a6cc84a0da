# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework.views import APIView

from tracker.responses import created_response, success_response
from tracker.selectors import bug_selector
from tracker.serializers.bug_serializer import (
    BugCreateSerializer,
    BugReassignSerializer,
    BugSerializer,
    BugStatusSerializer,
    BugUpdateSerializer,
)
from tracker.services import bug_service
from .utils import CONFLICT, UPLOAD_PARSERS, envelope, extend_schema, path_int, q_int, std_errors


class BugListCreateView(APIView):
    """
    GET: bugs visible to the caller, optionally for one project
    POST: file a bug / feature (not developers); assignee defaults to the first developer
    """
    parser_classes = UPLOAD_PARSERS

    @extend_schema(
        tags=["Bugs"],
        summary="List bugs",
        parameters=[q_int("projectId", "Only bugs of this project")],
        responses={200: envelope("BugListResponse", BugSerializer, many=True), **std_errors()},
    )
    def get(self, request):
        bugs = bug_selector.list_bugs(request.user, project_id=request.query_params.get("projectId"))
        return success_response("Bugs retrieved successfully", BugSerializer(bugs, many=True).data)

    @extend_schema(
        tags=["Bugs"],
        summary="Create a bug or feature",
        request=BugCreateSerializer,
        responses={201: envelope("BugCreateResponse", BugSerializer), **std_errors(CONFLICT)},
    )
    def post(self, request):
        s = BugCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        bug = bug_service.create_bug(
            actor=request.user, screenshot=request.FILES.get("screenshot"), **s.validated_data
        )
        return created_response("Bug created successfully", BugSerializer(bug).data)


class BugDetailView(APIView):
    parser_classes = UPLOAD_PARSERS

    @extend_schema(
        tags=["Bugs"],
        summary="Get a bug",
        parameters=[path_int("bug_id", "Bug ID")],
        responses={200: envelope("BugDetailResponse", BugSerializer), **std_errors()},
    )
    def get(self, request, bug_id: int):
        bug = bug_selector.get_bug(request.user, bug_id)
        return success_response("Bug retrieved successfully", BugSerializer(bug).data)

    @extend_schema(
        tags=["Bugs"],
        summary="Update a bug (developers: status and description only)",
        parameters=[path_int("bug_id", "Bug ID")],
        request=BugUpdateSerializer,
        responses={200: envelope("BugUpdateResponse", BugSerializer), **std_errors(CONFLICT)},
    )
    def patch(self, request, bug_id: int):
        s = BugUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        bug = bug_service.update_bug(
            actor=request.user, bug_id=bug_id, data=s.validated_data,
            screenshot=request.FILES.get("screenshot"),
        )
        return success_response("Bug updated successfully", BugSerializer(bug).data)

    @extend_schema(
        tags=["Bugs"],
        summary="Delete a bug",
        parameters=[path_int("bug_id", "Bug ID")],
        responses={200: envelope("BugDeleteResponse"), **std_errors()},
    )
    def delete(self, request, bug_id: int):
        bug_service.delete_bug(actor=request.user, bug_id=bug_id)
        return success_response("Bug deleted successfully")


class BugStatusView(APIView):
    @extend_schema(
        tags=["Bugs"],
        summary="Change only the status",
        parameters=[path_int("bug_id", "Bug ID")],
        request=BugStatusSerializer,
        responses={200: envelope("BugStatusResponse", BugSerializer), **std_errors()},
    )
    def patch(self, request, bug_id: int):
        s = BugStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        bug = bug_service.update_status(actor=request.user, bug_id=bug_id, **s.validated_data)
        return success_response("Bug status updated successfully", BugSerializer(bug).data)


class BugReassignView(APIView):
    @extend_schema(
        tags=["Bugs"],
        summary="Reassign to another developer of the project",
        parameters=[path_int("bug_id", "Bug ID")],
        request=BugReassignSerializer,
        responses={200: envelope("BugReassignResponse", BugSerializer), **std_errors()},
    )
    def post(self, request, bug_id: int):
        s = BugReassignSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        bug = bug_service.reassign_bug(actor=request.user, bug_id=bug_id, **s.validated_data)
        return success_response("Bug reassigned successfully", BugSerializer(bug).data)
