from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class RepActivity(models.Model):
    class ActivityType(models.TextChoices):
        EVENT_HOSTED = "event_hosted", _("Event Hosted")
        EVENT_JOINED = "event_joined", _("Event Joined")
        VERIFICATION_COMPLETED = (
            "verification_completed",
            _("Verification Completed"),
        )
        OTHER = "other", _("Other")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="rep_activities",
    )
    activity_type = models.CharField(max_length=50, choices=ActivityType.choices)
    points_earned = models.IntegerField()
    related_event = models.ForeignKey(
        "events.Event",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="rep_activities",
    )
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "rep activities"

    def __str__(self):
        return f"{self.user} +{self.points_earned} ({self.activity_type})"
