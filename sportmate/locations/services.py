import logging

from django.db import transaction
from django.utils import timezone

from sportmate.locations.models import Location
from sportmate.notifications.models import Notification

logger = logging.getLogger(__name__)


def submit_location(submitted_by, **fields) -> Location:
    """Create a submission; public spaces qualify for the automatic tier."""
    fields.pop("status", None)
    fields.pop("approval_tier", None)
    tier = (
        Location.ApprovalTier.TIER_1
        if fields.get("is_public_space")
        else Location.ApprovalTier.TIER_2
    )
    location = Location.objects.create(
        submitted_by=submitted_by,
        status=Location.Status.PENDING,
        approval_tier=tier,
        **fields,
    )
    logger.info(
        "User %s submitted location %s (%s)", submitted_by.pk, location.pk, tier
    )
    return location


def review_location(
    location: Location, status: str, review_notes: str = "", reviewed_by=None
) -> Location:
    with transaction.atomic():
        location.status = status
        location.review_notes = review_notes or ""
        location.reviewed_by = reviewed_by
        location.reviewed_at = timezone.now()
        location.save(
            update_fields=[
                "status",
                "review_notes",
                "reviewed_by",
                "reviewed_at",
                "updated_at",
            ]
        )
        Notification.objects.create(
            recipient_id=location.submitted_by_id,
            title=f"Location {location.get_status_display().lower()}",
            message=review_notes
            or f"Your submission '{location.name}' was {location.status}.",
            notification_type=Notification.Type.LOCATION,
            related_link="/submit-location",
        )
    logger.info("Location %s reviewed: %s", location.pk, status)
    return location
