# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework.views import APIView

from tracker.responses import created_response, success_response
from tracker.selectors import project_selector
from tracker.serializers.project_serializer import (
    AssignDevelopersSerializer,
    AssignQASerializer,
    ProjectCreateSerializer,
    ProjectSerializer,
    ProjectUpdateSerializer,
)
from tracker.services import project_service
from .utils import UPLOAD_PARSERS, envelope, extend_schema, path_int, std_errors


class ProjectListCreateView(APIView):
    """
    GET: all projects (admin / manager)
    POST: create a project; developers need at least one QA in the same request
    """
    parser_classes = UPLOAD_PARSERS

    @extend_schema(
        tags=["Projects"],
        summary="List all projects",
        responses={200: envelope("ProjectListResponse", ProjectSerializer, many=True), **std_errors()},
    )
    def get(self, request):
        projects = project_selector.list_projects(request.user)
        return success_response("Projects retrieved successfully", ProjectSerializer(projects, many=True).data)

    @extend_schema(
        tags=["Projects"],
        summary="Create a project",
        request=ProjectCreateSerializer,
        responses={201: envelope("ProjectCreateResponse", ProjectSerializer), **std_errors()},
    )
    def post(self, request):
        s = ProjectCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        project = project_service.create_project(
            actor=request.user, picture=request.FILES.get("picture"), **s.validated_data
        )
        return created_response("Project created successfully", ProjectSerializer(project).data)


class AssignedProjectListView(APIView):
    @extend_schema(
        tags=["Projects"],
        summary="Projects the caller is staffed on (QA / developer)",
        responses={200: envelope("AssignedProjectListResponse", ProjectSerializer, many=True), **std_errors()},
    )
    def get(self, request):
        projects = project_selector.list_assigned_projects(request.user)
        return success_response(
            "Assigned projects retrieved successfully", ProjectSerializer(projects, many=True).data
        )


class ProjectDetailView(APIView):
    parser_classes = UPLOAD_PARSERS

    @extend_schema(
        tags=["Projects"],
        summary="Get a project",
        parameters=[path_int("project_id", "Project ID")],
        responses={200: envelope("ProjectDetailResponse", ProjectSerializer), **std_errors()},
    )
    def get(self, request, project_id: int):
        project = project_selector.get_project(request.user, project_id)
        return success_response("Project retrieved successfully", ProjectSerializer(project).data)

    @extend_schema(
        tags=["Projects"],
        summary="Update a project",
        parameters=[path_int("project_id", "Project ID")],
        request=ProjectUpdateSerializer,
        responses={200: envelope("ProjectUpdateResponse", ProjectSerializer), **std_errors()},
    )
    def patch(self, request, project_id: int):
        s = ProjectUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        project = project_service.update_project(
            actor=request.user, project_id=project_id, data=s.validated_data,
            picture=request.FILES.get("picture"),
        )
        return success_response("Project updated successfully", ProjectSerializer(project).data)

    @extend_schema(
        tags=["Projects"],
        summary="Delete a project and its bugs",
        parameters=[path_int("project_id", "Project ID")],
        responses={200: envelope("ProjectDeleteResponse"), **std_errors()},
    )
    def delete(self, request, project_id: int):
        removed = project_service.delete_project(actor=request.user, project_id=project_id)
        return success_response("Project deleted successfully", {"deletedBugs": removed})


class AssignQAView(APIView):
    @extend_schema(
        tags=["Projects"],
        summary="Replace the project's QA team",
        parameters=[path_int("project_id", "Project ID")],
        request=AssignQASerializer,
        responses={200: envelope("AssignQAResponse", ProjectSerializer), **std_errors()},
    )
    def post(self, request, project_id: int):
        s = AssignQASerializer(data=request.data)
        s.is_valid(raise_exception=True)
        project = project_service.assign_qa(
            actor=request.user, project_id=project_id, qa_ids=s.validated_data["qa_ids"]
        )
        return success_response("QA assigned successfully", ProjectSerializer(project).data)


class AssignDevelopersView(APIView):
    @extend_schema(
        tags=["Projects"],
        summary="Replace the project's developer team (requires QA)",
        parameters=[path_int("project_id", "Project ID")],
        request=AssignDevelopersSerializer,
        responses={200: envelope("AssignDevelopersResponse", ProjectSerializer), **std_errors()},
    )
    def post(self, request, project_id: int):
        s = AssignDevelopersSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        project = project_service.assign_developers(
            actor=request.user, project_id=project_id, developer_ids=s.validated_data["developer_ids"]
        )
        return success_response("Developers assigned successfully", ProjectSerializer(project).data)
