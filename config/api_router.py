from django.conf import settings
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from sportmate.events.api.views import EventViewSet
from sportmate.locations.api.views import AdminLocationViewSet
from sportmate.locations.api.views import LocationViewSet
from sportmate.notifications.api.views import NotificationViewSet
from sportmate.users.api.views import AdminStatusView
from sportmate.users.api.views import MapboxTokenView
from sportmate.users.api.views import UserViewSet
from sportmate.verification.api.views import AdminVerificationQueueView
from sportmate.verification.api.views import AdminVerificationReviewView
from sportmate.verification.api.views import VerificationDocumentListView
from sportmate.verification.api.views import VerificationUploadView

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("users", UserViewSet)
router.register("events", EventViewSet)
router.register("locations", LocationViewSet)
router.register("admin/locations", AdminLocationViewSet, basename="admin-locations")
router.register("notifications", NotificationViewSet, basename="notifications")


app_name = "api"
urlpatterns = [
    path("auth/admin/", AdminStatusView.as_view(), name="auth-admin"),
    path("mapbox-token/", MapboxTokenView.as_view(), name="mapbox-token"),
    path(
        "verification/upload/",
        VerificationUploadView.as_view(),
        name="verification-upload",
    ),
    path(
        "verification/documents/",
        VerificationDocumentListView.as_view(),
        name="verification-documents",
    ),
    path(
        "admin/verification-documents/",
        AdminVerificationQueueView.as_view(),
        name="admin-verification-documents",
    ),
    path(
        "admin/users/<int:user_id>/verification/",
        AdminVerificationReviewView.as_view(),
        name="admin-user-verification",
    ),
    *router.urls,
]
