from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


def verification_document_upload_to(instance, filename):
    return f"verification/{instance.document_type}/{instance.user_id}/{filename}"


class VerificationDocument(models.Model):
    class DocumentType(models.TextChoices):
        SELFIE = "selfie", _("Selfie")
        GOVERNMENT_ID = "government_id", _("Government ID")

    class ReviewStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="verification_documents",
    )
    document_type = models.CharField(max_length=20, choices=DocumentType.choices)
    file = models.FileField(upload_to=verification_document_upload_to)
    file_name = models.CharField(max_length=255, help_text=_("Original upload name"))
    uploaded_at = models.DateTimeField(auto_now_add=True)
    verified_at = models.DateTimeField(null=True, blank=True)
    review_status = models.CharField(
        max_length=20, choices=ReviewStatus.choices, default=ReviewStatus.PENDING
    )
    review_notes = models.TextField(blank=True, default="")
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_verification_documents",
    )

    class Meta:
        ordering = ["-uploaded_at", "-id"]

    def __str__(self):
        return f"{self.get_document_type_display()} for {self.user_id}"
