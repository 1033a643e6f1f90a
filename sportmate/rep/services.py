import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F

from sportmate.rep.models import RepActivity

logger = logging.getLogger(__name__)

User = get_user_model()

TIER_PRO_THRESHOLD = 1000
TIER_PREMIUM_THRESHOLD = 250

POINTS_EVENT_HOSTED = 15
POINTS_EVENT_JOINED = 5
POINTS_VERIFICATION_COMPLETED = 50

PREMIUM_FEATURES: dict[str, tuple[str, ...]] = {
    "same_day_events": (User.Tier.PREMIUM, User.Tier.PRO),
    "unlimited_events": (User.Tier.PRO,),
    "priority_support": (User.Tier.PREMIUM, User.Tier.PRO),
    "advanced_filters": (User.Tier.PREMIUM, User.Tier.PRO),
}


def calculate_user_tier(rep_points: int) -> str:
    if rep_points >= TIER_PRO_THRESHOLD:
        return User.Tier.PRO
    if rep_points >= TIER_PREMIUM_THRESHOLD:
        return User.Tier.PREMIUM
    return User.Tier.FREE


def add_rep_points(  # noqa: PLR0913
    user,
    activity_type: str,
    points: int,
    *,
    related_event=None,
    description: str = "",
) -> RepActivity:
    """Record a rep activity and move the user's running total and tier.

    The increment uses an F-expression so concurrent awards do not lose
    points; the tier is re-derived from the stored total afterwards.
    """
    with transaction.atomic():
        activity = RepActivity.objects.create(
            user=user,
            activity_type=activity_type,
            points_earned=points,
            related_event=related_event,
            description=description,
        )
        User.objects.filter(pk=user.pk).update(rep_points=F("rep_points") + points)
        row = User.objects.select_for_update().only("rep_points", "user_tier").get(
            pk=user.pk
        )
        new_tier = calculate_user_tier(row.rep_points)
        if row.user_tier != new_tier:
            User.objects.filter(pk=user.pk).update(user_tier=new_tier)
            logger.info(
                "User %s moved from tier %s to %s", user.pk, row.user_tier, new_tier
            )

    user.rep_points = row.rep_points
    user.user_tier = new_tier
    return activity


def get_user_rep_points(user) -> int:
    return (
        User.objects.filter(pk=user.pk).values_list("rep_points", flat=True).first()
        or 0
    )


def check_premium_access(user, feature: str) -> bool:
    required_tiers = PREMIUM_FEATURES.get(feature)
    if not required_tiers:
        return False
    tier = (
        User.objects.filter(pk=user.pk).values_list("user_tier", flat=True).first()
    )
    return (tier or User.Tier.FREE) in required_tiers
