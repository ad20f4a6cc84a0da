# ============================================
# tracker/responses.py
# ============================================
from django.http import JsonResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response


def _timestamp() -> str:
    return timezone.now().isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _envelope(success: bool, message: str, **extra) -> dict:
    body = {'success': success, 'message': message}
    body.update({k: v for k, v in extra.items() if v is not None})
    body['timestamp'] = _timestamp()
    return body


def success_response(message='Success', data=None, status_code=status.HTTP_200_OK) -> Response:
    return Response(_envelope(True, message, data=data), status=status_code)


def created_response(message='Resource created successfully', data=None) -> Response:
    return success_response(message, data, status.HTTP_201_CREATED)


def error_response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                   message='Internal server error', errors=None) -> Response:
    return Response(_envelope(False, message, errors=errors), status=status_code)


def route_not_found(request, exception=None):
    """handler404 for paths no view matches."""
    return JsonResponse(
        _envelope(False, f"Route {request.path} not found"),
        status=status.HTTP_404_NOT_FOUND,
    )
