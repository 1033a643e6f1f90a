"""Identity verification workflow: submission and admin review."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from sportmate.notifications.models import Notification
from sportmate.rep.services import POINTS_VERIFICATION_COMPLETED
from sportmate.rep.services import add_rep_points
from sportmate.verification.models import VerificationDocument

logger = logging.getLogger(__name__)

User = get_user_model()


def submit_documents(user, selfie, government_id) -> tuple[VerificationDocument, ...]:
    """Store both uploads and put the user's verification in review."""
    with transaction.atomic():
        docs = tuple(
            VerificationDocument.objects.create(
                user=user,
                document_type=document_type,
                file=upload,
                file_name=upload.name,
            )
            for document_type, upload in (
                (VerificationDocument.DocumentType.SELFIE, selfie),
                (VerificationDocument.DocumentType.GOVERNMENT_ID, government_id),
            )
        )
        user.verification_status = User.VerificationStatus.PENDING
        user.is_verified = False
        user.save(update_fields=["verification_status", "is_verified", "updated_at"])
    logger.info("User %s submitted verification documents", user.pk)
    return docs


def update_verification_status(
    user, status: str, review_notes: str = "", reviewed_by=None
):
    """Apply an admin decision to ``user``.

    Approval sets the verified flags, awards the verification rep bonus and
    marks the user's documents approved; rejection marks them rejected. The
    user is notified either way.
    """
    approved = status == User.VerificationStatus.VERIFIED
    now = timezone.now()
    with transaction.atomic():
        user.verification_status = status
        user.is_verified = approved
        fields = ["verification_status", "is_verified", "updated_at"]
        if approved:
            user.has_completed_verification = True
            fields.append("has_completed_verification")
        user.save(update_fields=fields)

        VerificationDocument.objects.filter(
            user=user, review_status=VerificationDocument.ReviewStatus.PENDING
        ).update(
            review_status=(
                VerificationDocument.ReviewStatus.APPROVED
                if approved
                else VerificationDocument.ReviewStatus.REJECTED
            ),
            review_notes=review_notes or "",
            reviewed_by=reviewed_by,
            verified_at=now if approved else None,
        )

        if approved:
            add_rep_points(
                user,
                "verification_completed",
                POINTS_VERIFICATION_COMPLETED,
                description="Identity verification approved",
            )

        Notification.objects.create(
            recipient=user,
            title="Identity verification " + ("approved" if approved else "rejected"),
            message=(
                "You're verified and can now host events."
                if approved
                else review_notes or "Your verification documents were rejected."
            ),
            notification_type=Notification.Type.VERIFICATION,
            related_link="/verify-identity",
        )
    logger.info(
        "Verification for user %s set to %s by %s",
        user.pk,
        status,
        getattr(reviewed_by, "pk", None),
    )
    return user
