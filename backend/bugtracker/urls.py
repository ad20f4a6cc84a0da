"""
URL configuration for the bugtracker project.

API routes sit at the root without a prefix (``/login``, ``/projects``, ``/bugs``);
the OpenAPI schema is served at ``/schema`` and Swagger UI at ``/docs``.
"""
# bugtracker/urls.py
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("schema", SpectacularAPIView.as_view(), name="schema"),
    path("docs", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("", include("tracker.urls")),
]

handler404 = "tracker.responses.route_not_found"
