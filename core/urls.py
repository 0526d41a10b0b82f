"""Root URL configuration.

Every app exposes its API routes from ``<app>/api/urls.py``; all of them are
mounted below ``/api/``.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("profiles.api.urls")),
    path("api/", include("stores.api.urls")),
    path("api/", include("ratings.api.urls")),
    path("api/", include("common.api.urls")),
]
