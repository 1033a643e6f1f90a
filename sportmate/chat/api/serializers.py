from rest_framework import serializers

from sportmate.chat.models import EventMessage
from sportmate.users.api.serializers import UserSummarySerializer


class EventMessageSerializer(serializers.ModelSerializer):
    """Chat history rows, shaped like the relay's ``new-message`` frames."""

    eventId = serializers.IntegerField(source="event_id", read_only=True)  # noqa: N815
    userId = serializers.IntegerField(source="user_id", read_only=True)  # noqa: N815
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)  # noqa: N815
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = EventMessage
        fields = ("id", "eventId", "userId", "message", "createdAt", "user")
        read_only_fields = ("id",)


class EventMessageCreateSerializer(serializers.Serializer):
    message = serializers.CharField(
        max_length=2000,
        error_messages={
            "blank": "Message content is required",
            "required": "Message content is required",
        },
    )
