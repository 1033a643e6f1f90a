from django.conf import settings
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.mixins import RetrieveModelMixin
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from sportmate.events.api.serializers import RsvpWithEventSerializer
from sportmate.events.api.serializers import UserSwipeSerializer
from sportmate.events.models import EventRsvp
from sportmate.events.models import UserSwipe
from sportmate.rep.services import check_premium_access
from sportmate.rep.services import get_user_rep_points
from sportmate.users.api.permissions import is_platform_admin
from sportmate.users.models import User

from .serializers import UserPreferencesSerializer
from .serializers import UserSerializer


@extend_schema_view(
    list=extend_schema(tags=["Users"]),
    retrieve=extend_schema(tags=["Users"]),
)
class UserViewSet(RetrieveModelMixin, ListModelMixin, GenericViewSet):
    serializer_class = UserSerializer
    queryset = User.objects.all()
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        user = self.request.user
        if is_platform_admin(user):
            return User.objects.all()
        return User.objects.filter(pk=user.pk)

    @action(detail=False, methods=["get", "patch"])
    def me(self, request):
        if request.method == "PATCH":
            serializer = UserSerializer(
                request.user,
                data=request.data,
                partial=True,
                context={"request": request},
            )
            serializer.is_valid(raise_exception=True)
            serializer.save()
            return Response(serializer.data)
        serializer = UserSerializer(request.user, context={"request": request})
        return Response(status=status.HTTP_200_OK, data=serializer.data)

    @action(detail=False, methods=["put"], url_path="me/preferences")
    def preferences(self, request):
        serializer = UserPreferencesSerializer(request.user, data=request.data)
        if not serializer.is_valid():
            return Response(
                {"message": "Invalid preferences data", "errors": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer.save()
        return Response(UserSerializer(request.user).data)

    @action(detail=False, methods=["get"], url_path="me/rep-points")
    def rep_points(self, request):
        return Response({"repPoints": get_user_rep_points(request.user)})

    @action(detail=False, methods=["get"], url_path="me/stats")
    def stats(self, request):
        user = request.user
        return Response(
            {
                "repPoints": get_user_rep_points(user),
                "hostedEvents": user.hosted_events.count(),
                "rsvps": user.rsvps.count(),
            }
        )

    @action(
        detail=False,
        methods=["get"],
        url_path=r"me/premium-access/(?P<feature>[\w-]+)",
    )
    def premium_access(self, request, feature=None):
        return Response({"hasAccess": check_premium_access(request.user, feature)})

    @action(detail=False, methods=["get"], url_path="me/rsvps")
    def rsvps(self, request):
        qs = EventRsvp.objects.filter(user=request.user).select_related(
            "event", "event__host", "user"
        )
        return Response(RsvpWithEventSerializer(qs, many=True).data)

    @action(detail=False, methods=["get"], url_path="me/swipes")
    def swipes(self, request):
        qs = UserSwipe.objects.filter(user=request.user)
        return Response(UserSwipeSerializer(qs, many=True).data)


class AdminStatusView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Authentication"])
    def get(self, request):
        if not is_platform_admin(request.user):
            return Response(
                {"message": "Admin access denied"}, status=status.HTTP_403_FORBIDDEN
            )
        return Response({"isAdmin": True, "email": request.user.email})


class MapboxTokenView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(tags=["Meta"])
    def get(self, request):
        return Response({"token": getattr(settings, "MAPBOX_ACCESS_TOKEN", "")})
