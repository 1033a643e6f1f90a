from django.conf import settings
from rest_framework import serializers

from sportmate.users.models import User
from sportmate.verification.models import VerificationDocument


def _validate_image_upload(upload):
    content_type = getattr(upload, "content_type", "") or ""
    if not content_type.startswith("image/"):
        msg = "Only image files are allowed"
        raise serializers.ValidationError(msg)
    max_bytes = settings.VERIFICATION_MAX_UPLOAD_BYTES
    if upload.size > max_bytes:
        msg = f"File exceeds the {max_bytes // (1024 * 1024)} MB limit"
        raise serializers.ValidationError(msg)
    return upload


class VerificationDocumentSerializer(serializers.ModelSerializer):
    class Meta:
        model = VerificationDocument
        fields = (
            "id",
            "user",
            "document_type",
            "file",
            "file_name",
            "uploaded_at",
            "verified_at",
            "review_status",
            "review_notes",
            "reviewed_by",
        )
        read_only_fields = fields


class VerificationUploadSerializer(serializers.Serializer):
    """Multipart payload: ``selfie`` and ``governmentId`` image files."""

    selfie = serializers.FileField(validators=[_validate_image_upload])
    governmentId = serializers.FileField(  # noqa: N815
        validators=[_validate_image_upload]
    )


class VerificationReviewSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[User.VerificationStatus.VERIFIED, User.VerificationStatus.REJECTED]
    )
    reviewNotes = serializers.CharField(  # noqa: N815
        required=False, allow_blank=True, default=""
    )
