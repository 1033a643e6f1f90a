from django.conf import settings
from django.db import models


class EventMessage(models.Model):
    """A chat line posted to an event's room. Immutable once written."""

    event = models.ForeignKey(
        "events.Event", on_delete=models.CASCADE, related_name="messages"
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="event_messages",
    )
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.user_id}@{self.event_id}: {self.message[:40]}"
