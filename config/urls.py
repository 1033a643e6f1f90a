from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include
from django.urls import path
from drf_spectacular.views import SpectacularAPIView
from drf_spectacular.views import SpectacularSwaggerView

from sportmate.users.api.auth_views import JWTCreateView
from sportmate.users.api.auth_views import JWTRefreshView
from sportmate.users.api.auth_views import JWTVerifyView

from .health import health as health_view

jwt_urlpatterns = [
    path("create/", JWTCreateView.as_view(), name="jwt-create"),
    path("refresh/", JWTRefreshView.as_view(), name="jwt-refresh"),
    path("verify/", JWTVerifyView.as_view(), name="jwt-verify"),
]

urlpatterns = [
    path(settings.ADMIN_URL, admin.site.urls),
    path("health/", health_view, name="health"),
    # The chat relay (/ws/chat/) and Socket.IO (/ws/notifications/) are
    # routed in config/asgi.py, not here.
    path("api/v1/", include(("config.api_router", "api"), namespace="api_v1")),
    path("api/v1/auth/jwt/", include(jwt_urlpatterns)),
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="api-schema-v1"),
    path(
        "api/v1/docs/",
        SpectacularSwaggerView.as_view(url_name="api-schema-v1"),
        name="api-docs-v1",
    ),
    # Verification uploads are served from MEDIA_ROOT in development only.
    *static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT),
]
