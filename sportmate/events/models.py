from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Event(models.Model):
    host = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="hosted_events",
    )
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    sport_type = models.CharField(max_length=50, help_text=_("Basketball, Soccer"))
    skill_level = models.CharField(
        max_length=20, help_text=_("beginner, recreational, collegiate, professional")
    )
    max_players = models.PositiveIntegerField()
    current_players = models.PositiveIntegerField(default=1)

    location_name = models.CharField(max_length=255)
    latitude = models.DecimalField(
        max_digits=10, decimal_places=8, null=True, blank=True
    )
    longitude = models.DecimalField(
        max_digits=11, decimal_places=8, null=True, blank=True
    )

    event_date = models.DateTimeField()
    event_time = models.CharField(max_length=20, help_text=_("Display time, e.g. 6pm"))

    notes = models.TextField(blank=True, default="")
    is_approved = models.BooleanField(default=True)
    is_canceled = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["event_date"]

    def __str__(self):
        return f"{self.title} ({self.sport_type})"


class EventRsvp(models.Model):
    class Status(models.TextChoices):
        INTERESTED = "interested", _("Interested")
        GOING = "going", _("Going")
        DECLINED = "declined", _("Declined")

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="rsvps")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="rsvps",
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.INTERESTED
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-joined_at"]
        unique_together = ("event", "user")

    def __str__(self):
        return f"{self.user} - {self.event} ({self.status})"


class UserSwipe(models.Model):
    class Direction(models.TextChoices):
        LEFT = "left", _("Left")
        RIGHT = "right", _("Right")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="swipes",
    )
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="swipes")
    direction = models.CharField(max_length=10, choices=Direction.choices)
    swiped_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-swiped_at"]

    def __str__(self):
        return f"{self.user} swiped {self.direction} on {self.event_id}"
