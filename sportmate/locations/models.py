from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Location(models.Model):
    """A playable venue suggested by a user, pending admin review."""

    class LocationType(models.TextChoices):
        PUBLIC_PARK = "public_park", _("Public park")
        SCHOOL = "school", _("School")
        GYM = "gym", _("Gym")
        COURT = "court", _("Court")
        FIELD = "field", _("Field")
        OTHER = "other", _("Other")

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")

    class ApprovalTier(models.TextChoices):
        TIER_1 = "tier_1", _("Automatic")
        TIER_2 = "tier_2", _("Manual review")
        TIER_3 = "tier_3", _("Partnership")

    name = models.CharField(max_length=255)
    address = models.CharField(max_length=500)
    latitude = models.DecimalField(max_digits=10, decimal_places=8)
    longitude = models.DecimalField(max_digits=11, decimal_places=8)
    location_type = models.CharField(max_length=20, choices=LocationType.choices)
    photo_url = models.URLField(max_length=500, blank=True, default="")
    description = models.TextField(blank=True, default="")
    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="submitted_locations",
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )
    approval_tier = models.CharField(
        max_length=10, choices=ApprovalTier.choices, default=ApprovalTier.TIER_2
    )
    review_notes = models.TextField(blank=True, default="")
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_locations",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    is_public_space = models.BooleanField(default=False)
    requires_permit = models.BooleanField(default=False)
    max_capacity = models.PositiveIntegerField(null=True, blank=True)
    amenities = models.JSONField(
        default=list, blank=True, help_text=_("parking, restrooms, lights")
    )
    operating_hours = models.CharField(
        max_length=50, blank=True, default="", help_text=_("dawn_to_dusk, 24_hours")
    )
    contact_info = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} ({self.get_status_display()})"
