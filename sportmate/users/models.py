from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.db.models import EmailField
from django.utils.translation import gettext_lazy as _


class User(AbstractUser):
    """
    Default custom user model for sportmate.

    Identity comes from the external provider; this row carries the player
    profile, discovery preferences, the verification gate and rep standing.
    """

    class SkillLevel(models.TextChoices):
        BEGINNER = "beginner", _("Beginner")
        RECREATIONAL = "recreational", _("Recreational")
        COLLEGIATE = "collegiate", _("Collegiate")
        PROFESSIONAL = "professional", _("Professional")

    class VerificationStatus(models.TextChoices):
        UNVERIFIED = "unverified", _("Unverified")
        PENDING = "pending", _("Pending")
        VERIFIED = "verified", _("Verified")
        REJECTED = "rejected", _("Rejected")

    class Tier(models.TextChoices):
        FREE = "free", _("Free")
        PREMIUM = "premium", _("Premium")
        PRO = "pro", _("Pro")

    name = CharField(_("Full Name"), blank=True, max_length=255)
    email = EmailField(_("email address"), unique=True)
    first_name = CharField(_("First Name"), max_length=150, blank=True)
    last_name = CharField(_("Last Name"), max_length=150, blank=True)
    profile_image_url = models.URLField(max_length=500, blank=True, default="")

    # Discovery preferences
    gender_identity = models.CharField(max_length=50, blank=True, default="")
    sports_interests = models.JSONField(default=list, blank=True)
    skill_level = models.CharField(
        max_length=20, choices=SkillLevel.choices, blank=True, default=""
    )
    search_radius = models.PositiveIntegerField(
        default=25, help_text=_("Search radius in miles")
    )

    # Identity verification
    is_verified = models.BooleanField(default=False)
    verification_status = models.CharField(
        max_length=20,
        choices=VerificationStatus.choices,
        default=VerificationStatus.UNVERIFIED,
    )
    has_completed_verification = models.BooleanField(default=False)
    phone_number = models.CharField(max_length=50, blank=True, default="")
    phone_verified = models.BooleanField(default=False)
    date_of_birth = models.DateField(null=True, blank=True)

    # Rep points / tiers
    rep_points = models.PositiveIntegerField(default=0)
    user_tier = models.CharField(
        max_length=10, choices=Tier.choices, default=Tier.FREE
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        self.name = f"{self.first_name} {self.last_name}".strip()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and (
            "first_name" in update_fields or "last_name" in update_fields
        ):
            kwargs["update_fields"] = {*update_fields, "name"}
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name or self.username
