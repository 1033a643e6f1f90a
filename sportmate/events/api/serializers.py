from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from sportmate.events.models import Event
from sportmate.events.models import EventRsvp
from sportmate.events.models import UserSwipe
from sportmate.users.api.serializers import UserSummarySerializer


class EventSerializer(serializers.ModelSerializer):
    host_details = UserSummarySerializer(source="host", read_only=True)

    class Meta:
        model = Event
        fields = "__all__"
        read_only_fields = (
            "host",
            "current_players",
            "is_approved",
            "is_canceled",
            "created_at",
            "updated_at",
        )

    def validate_max_players(self, value):
        if value < 1:
            msg = _("An event needs room for at least one player.")
            raise serializers.ValidationError(msg)
        return value


class EventUpdateSerializer(EventSerializer):
    """Hosts may cancel their own event; approval stays with admins."""

    class Meta(EventSerializer.Meta):
        read_only_fields = (
            "host",
            "current_players",
            "is_approved",
            "created_at",
            "updated_at",
        )


class EventRsvpSerializer(serializers.ModelSerializer):
    user_details = UserSummarySerializer(source="user", read_only=True)

    class Meta:
        model = EventRsvp
        fields = ("id", "event", "user", "status", "joined_at", "user_details")
        read_only_fields = ("id", "event", "user", "joined_at")


class RsvpWithEventSerializer(EventRsvpSerializer):
    event_details = EventSerializer(source="event", read_only=True)

    class Meta(EventRsvpSerializer.Meta):
        fields = (*EventRsvpSerializer.Meta.fields, "event_details")


class RsvpRequestSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=EventRsvp.Status.choices,
        required=False,
        default=EventRsvp.Status.INTERESTED,
    )


class UserSwipeSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserSwipe
        fields = ("id", "user", "event", "direction", "swiped_at")
        read_only_fields = ("id", "user", "event", "swiped_at")


class SwipeRequestSerializer(serializers.Serializer):
    direction = serializers.ChoiceField(
        choices=UserSwipe.Direction.choices,
        error_messages={"invalid_choice": "Invalid swipe direction"},
    )


class EventListParamsSerializer(serializers.Serializer):
    sport = serializers.CharField(required=False, allow_blank=True)
    skill = serializers.CharField(required=False, allow_blank=True)
    view = serializers.CharField(required=False, allow_blank=True)
    latitude = serializers.FloatField(required=False, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, min_value=-180, max_value=180)
    radius = serializers.FloatField(required=False, min_value=0)
