"""Event discovery, RSVP and swipe bookkeeping."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.db import transaction
from django.db.models import F
from django.db.models.functions import Greatest
from django.utils import timezone

from sportmate.events.models import Event
from sportmate.events.models import EventRsvp
from sportmate.events.models import UserSwipe
from sportmate.notifications.models import Notification
from sportmate.rep.services import POINTS_EVENT_JOINED
from sportmate.rep.services import add_rep_points

if TYPE_CHECKING:
    from django.db.models import QuerySet

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3958.8


@dataclass(frozen=True)
class EventFilters:
    sport_type: str | None = None
    skill_level: str | None = None
    host_id: int | None = None
    exclude_swiped_by: int | None = None
    latitude: float | None = None
    longitude: float | None = None
    radius: float | None = None


def distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(a))


def discoverable_events(filters: EventFilters) -> list[Event] | QuerySet[Event]:
    """Upcoming, approved, non-canceled events matching the browse filters."""

    qs = Event.objects.select_related("host").filter(
        is_canceled=False,
        is_approved=True,
        event_date__gte=timezone.now(),
    )
    if filters.sport_type:
        qs = qs.filter(sport_type__iexact=filters.sport_type)
    if filters.skill_level:
        qs = qs.filter(skill_level__iexact=filters.skill_level)
    if filters.host_id:
        qs = qs.filter(host_id=filters.host_id)
    if filters.exclude_swiped_by:
        swiped = UserSwipe.objects.filter(
            user_id=filters.exclude_swiped_by
        ).values_list("event_id", flat=True)
        qs = qs.exclude(id__in=swiped)
    qs = qs.order_by("event_date")

    if filters.latitude is None or filters.longitude is None or not filters.radius:
        return qs
    return [
        event
        for event in qs.exclude(latitude=None).exclude(longitude=None)
        if distance_miles(
            filters.latitude,
            filters.longitude,
            float(event.latitude),
            float(event.longitude),
        )
        <= filters.radius
    ]


def create_rsvp(event: Event, user, status: str = EventRsvp.Status.INTERESTED):
    """Create the user's RSVP, or move an existing one to ``status``.

    Returns ``(rsvp, created)``. The player count only moves on creation.
    """
    with transaction.atomic():
        rsvp, created = EventRsvp.objects.select_for_update().get_or_create(
            event=event, user=user, defaults={"status": status}
        )
        previous_status = None if created else rsvp.status
        if not created and rsvp.status != status:
            rsvp.status = status
            rsvp.save(update_fields=["status"])
        if created:
            Event.objects.filter(pk=event.pk).update(
                current_players=F("current_players") + 1,
                updated_at=timezone.now(),
            )

    if status == EventRsvp.Status.GOING and previous_status != status:
        add_rep_points(
            user,
            "event_joined",
            POINTS_EVENT_JOINED,
            related_event=event,
            description=f"Joined event: {event.title}",
        )
    if created and event.host_id != user.pk:
        Notification.objects.create(
            recipient_id=event.host_id,
            title="New RSVP",
            message=f"{user} RSVP'd ({rsvp.status}) to {event.title}",
            notification_type=Notification.Type.RSVP,
            related_link=f"/events/{event.pk}/",
        )
    logger.info(
        "RSVP %s for user %s on event %s (%s)",
        "created" if created else "updated",
        user.pk,
        event.pk,
        status,
    )
    return rsvp, created


def delete_rsvp(event: Event, user) -> bool:
    with transaction.atomic():
        deleted, _ = EventRsvp.objects.filter(event=event, user=user).delete()
        if deleted:
            Event.objects.filter(pk=event.pk).update(
                current_players=Greatest(F("current_players") - 1, 0),
                updated_at=timezone.now(),
            )
    return bool(deleted)


def record_swipe(user, event: Event, direction: str) -> UserSwipe:
    swipe = UserSwipe.objects.create(user=user, event=event, direction=direction)
    if (
        direction == UserSwipe.Direction.RIGHT
        and not EventRsvp.objects.filter(event=event, user=user).exists()
    ):
        create_rsvp(event, user, EventRsvp.Status.INTERESTED)
    return swipe


def is_event_participant(event: Event, user_id) -> bool:
    """Host or RSVP holder; the rule that gates chat access."""
    if event.host_id == user_id:
        return True
    return EventRsvp.objects.filter(event_id=event.pk, user_id=user_id).exists()
