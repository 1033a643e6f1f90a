"""Bearer-token endpoints, tagged so they group under one schema section.

Tokens are plain JSON in and out; the client keeps them and sends
``Authorization: Bearer`` (REST) or ``?token=`` (WebSocket, Socket.IO).
"""

from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework_simplejwt.views import TokenVerifyView

_jwt_tag = extend_schema_view(post=extend_schema(tags=["JWT Authentication"]))


@_jwt_tag
class JWTCreateView(TokenObtainPairView):
    pass


@_jwt_tag
class JWTRefreshView(TokenRefreshView):
    pass


@_jwt_tag
class JWTVerifyView(TokenVerifyView):
    pass
