from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from sportmate.locations.models import Location
from sportmate.locations.services import review_location
from sportmate.locations.services import submit_location
from sportmate.users.api.permissions import IsPlatformAdmin

from .filters import LocationFilter
from .serializers import LocationReviewSerializer
from .serializers import LocationSerializer


@extend_schema_view(
    list=extend_schema(tags=["Locations"]),
    create=extend_schema(tags=["Locations"]),
)
class LocationViewSet(mixins.ListModelMixin, mixins.CreateModelMixin, GenericViewSet):
    queryset = Location.objects.all().select_related("submitted_by")
    serializer_class = LocationSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = LocationFilter

    def perform_create(self, serializer):
        serializer.instance = submit_location(
            self.request.user, **serializer.validated_data
        )


@extend_schema_view(list=extend_schema(tags=["Admin"]))
class AdminLocationViewSet(mixins.ListModelMixin, GenericViewSet):
    """Review queue. Without a ``status`` filter only pending rows are listed."""

    queryset = Location.objects.all().select_related("submitted_by")
    serializer_class = LocationSerializer
    permission_classes = [IsAuthenticated, IsPlatformAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_class = LocationFilter

    def get_queryset(self):
        qs = super().get_queryset()
        if self.action == "list" and not self.request.query_params.get("status"):
            qs = qs.filter(status=Location.Status.PENDING)
        return qs

    @extend_schema(tags=["Admin"], request=LocationReviewSerializer)
    @action(detail=True, methods=["post"])
    def review(self, request, pk=None):
        location = get_object_or_404(Location, pk=pk)
        serializer = LocationReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review_location(
            location,
            serializer.validated_data["status"],
            review_notes=serializer.validated_data["reviewNotes"],
            reviewed_by=request.user,
        )
        return Response(LocationSerializer(location).data, status=status.HTTP_200_OK)
