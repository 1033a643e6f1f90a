"""Views for the Events API."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from sportmate.chat.api.serializers import EventMessageCreateSerializer
from sportmate.chat.api.serializers import EventMessageSerializer
from sportmate.chat.models import EventMessage
from sportmate.chat.moderation import contains_banned_term
from sportmate.events.models import Event
from sportmate.events.models import EventRsvp
from sportmate.events.services import EventFilters
from sportmate.events.services import create_rsvp
from sportmate.events.services import delete_rsvp
from sportmate.events.services import discoverable_events
from sportmate.events.services import is_event_participant
from sportmate.events.services import record_swipe
from sportmate.rep.services import POINTS_EVENT_HOSTED
from sportmate.rep.services import add_rep_points
from sportmate.rep.services import check_premium_access
from sportmate.users.api.permissions import IsEventHostOrReadOnly

from .serializers import EventListParamsSerializer
from .serializers import EventRsvpSerializer
from .serializers import EventSerializer
from .serializers import EventUpdateSerializer
from .serializers import RsvpRequestSerializer
from .serializers import SwipeRequestSerializer
from .serializers import UserSwipeSerializer

logger = logging.getLogger(__name__)

User = get_user_model()

ACCESS_DENIED = "Access denied to event chat"


@extend_schema_view(
    list=extend_schema(tags=["Events"]),
    retrieve=extend_schema(tags=["Events"]),
    create=extend_schema(tags=["Events"]),
    update=extend_schema(tags=["Events"]),
    partial_update=extend_schema(tags=["Events"]),
    destroy=extend_schema(tags=["Events"]),
)
class EventViewSet(viewsets.ModelViewSet):
    queryset = Event.objects.all().select_related("host")
    serializer_class = EventSerializer
    permission_classes = [IsAuthenticated, IsEventHostOrReadOnly]

    def get_permissions(self):
        # Participation endpoints are open to any signed-in player.
        if self.action in ("rsvp", "rsvps", "swipe", "messages"):
            return [IsAuthenticated()]
        return [p() for p in self.permission_classes]

    def get_serializer_class(self):
        if self.action in ("update", "partial_update"):
            return EventUpdateSerializer
        return super().get_serializer_class()

    def list(self, request, *args, **kwargs):
        params = EventListParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data
        filters = EventFilters(
            sport_type=data.get("sport") or None,
            skill_level=data.get("skill") or None,
            exclude_swiped_by=request.user.pk if data.get("view") == "swipe" else None,
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            radius=data.get("radius"),
        )
        events = discoverable_events(filters)
        return Response(self.get_serializer(events, many=True).data)

    def create(self, request, *args, **kwargs):
        user = request.user
        if user.verification_status != User.VerificationStatus.VERIFIED:
            return Response(
                {
                    "message": (
                        "You must complete identity verification before creating "
                        "events. Please submit your documents for review."
                    ),
                    "type": "verification_required",
                },
                status=status.HTTP_403_FORBIDDEN,
            )

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event_date = serializer.validated_data["event_date"]
        if timezone.localdate(event_date) == timezone.localdate() and not (
            check_premium_access(user, "same_day_events")
        ):
            return Response(
                {
                    "message": (
                        "Events for today require Premium access. Try scheduling "
                        "for tomorrow or earn more rep points to upgrade your "
                        "account."
                    ),
                    "type": "premium_required",
                    "feature": "same_day_events",
                },
                status=status.HTTP_403_FORBIDDEN,
            )

        with transaction.atomic():
            event = serializer.save(host=user)
            add_rep_points(
                user,
                "event_hosted",
                POINTS_EVENT_HOSTED,
                related_event=event,
                description=f"Hosted event: {event.title}",
            )
        logger.info("User %s created event %s", user.pk, event.pk)
        return Response(self.get_serializer(event).data, status=status.HTTP_201_CREATED)

    def perform_destroy(self, instance):
        logger.info("User %s deleted event %s", self.request.user.pk, instance.pk)
        instance.delete()

    @extend_schema(tags=["Events"])
    @action(detail=False, methods=["get"], url_path=r"host/(?P<host_id>\d+)")
    def host(self, request, host_id=None):
        qs = Event.objects.filter(host_id=host_id).select_related("host")
        return Response(self.get_serializer(qs.order_by("-created_at"), many=True).data)

    @extend_schema(tags=["Events"], request=RsvpRequestSerializer)
    @action(detail=True, methods=["post", "delete"])
    def rsvp(self, request, pk=None):
        event = self.get_object()
        if request.method == "DELETE":
            delete_rsvp(event, request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = RsvpRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rsvp, created = create_rsvp(
            event, request.user, serializer.validated_data["status"]
        )
        return Response(
            EventRsvpSerializer(rsvp).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @extend_schema(tags=["Events"])
    @action(detail=True, methods=["get"])
    def rsvps(self, request, pk=None):
        event = self.get_object()
        qs = EventRsvp.objects.filter(event=event).select_related("user")
        return Response(EventRsvpSerializer(qs, many=True).data)

    @extend_schema(tags=["Events"], request=SwipeRequestSerializer)
    @action(detail=True, methods=["post"])
    def swipe(self, request, pk=None):
        event = self.get_object()
        serializer = SwipeRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"message": "Invalid swipe direction"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        swipe = record_swipe(
            request.user, event, serializer.validated_data["direction"]
        )
        return Response(
            UserSwipeSerializer(swipe).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(tags=["Chat"], request=EventMessageCreateSerializer)
    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        if request.method == "POST":
            return self._post_message(request, pk)

        event = get_object_or_404(Event, pk=pk)
        if not is_event_participant(event, request.user.pk):
            return Response(
                {"message": ACCESS_DENIED}, status=status.HTTP_403_FORBIDDEN
            )
        qs = EventMessage.objects.filter(event=event).select_related("user")
        return Response(EventMessageSerializer(qs, many=True).data)

    def _post_message(self, request, pk):
        serializer = EventMessageCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"message": "Message content is required"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        text = serializer.validated_data["message"].strip()
        if contains_banned_term(text):
            logger.warning(
                "Blocked chat message from user %s on event %s", request.user.pk, pk
            )
            return Response(
                {
                    "message": "Message contains inappropriate content and was blocked",
                    "type": "content_filter",
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        event = get_object_or_404(Event, pk=pk)
        if not is_event_participant(event, request.user.pk):
            return Response(
                {"message": ACCESS_DENIED}, status=status.HTTP_403_FORBIDDEN
            )
        record = EventMessage.objects.create(
            event=event, user=request.user, message=text
        )
        return Response(
            EventMessageSerializer(record).data, status=status.HTTP_201_CREATED
        )
