# views/utils.py
"""
Shared tooling for drf-spectacular docs on the tracker APIView classes.
Every body is wrapped in the {success, message, data?, timestamp} envelope.
"""
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from drf_spectacular.types import OpenApiTypes
from rest_framework import serializers
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser

# ---- Parsers for endpoints that take an optional image
UPLOAD_PARSERS = [JSONParser, MultiPartParser, FormParser]

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="ErrorEnvelope",
    fields={
        "success": serializers.BooleanField(default=False),
        "message": serializers.CharField(),
        "errors": serializers.JSONField(required=False),
        "timestamp": serializers.DateTimeField(),
    },
)


def envelope(name: str, serializer=None, many: bool = False):
    """Success envelope schema around ``serializer``; no data key when None."""
    fields = {
        "success": serializers.BooleanField(default=True),
        "message": serializers.CharField(),
        "timestamp": serializers.DateTimeField(),
    }
    if serializer is not None:
        fields["data"] = serializer(many=many) if isinstance(serializer, type) else serializer
    return inline_serializer(name=name, fields=fields)


# ---- Param helpers

def path_int(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.PATH, description=description)

def q_int(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.QUERY, required=required, description=description)

def q_str(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.QUERY, required=required, description=description)


def std_errors(extra: dict | None = None):
    """Standard error response mapping you can merge into responses=..."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Bad Request"),
        401: OpenApiResponse(ErrorSerializer, description="Unauthorized"),
        403: OpenApiResponse(ErrorSerializer, description="Forbidden"),
        404: OpenApiResponse(ErrorSerializer, description="Not Found"),
    }
    if extra:
        errs.update(extra)
    return errs


CONFLICT = {409: OpenApiResponse(ErrorSerializer, description="Conflict")}

__all__ = [
    "extend_schema", "OpenApiResponse", "UPLOAD_PARSERS", "ErrorSerializer",
    "envelope", "path_int", "q_int", "q_str", "std_errors", "CONFLICT",
]
