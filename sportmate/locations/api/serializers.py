from rest_framework import serializers

from sportmate.locations.models import Location


class LocationSerializer(serializers.ModelSerializer):
    amenities = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False
    )

    class Meta:
        model = Location
        fields = "__all__"
        read_only_fields = (
            "submitted_by",
            "status",
            "approval_tier",
            "review_notes",
            "reviewed_by",
            "reviewed_at",
            "created_at",
            "updated_at",
        )


class LocationReviewSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[Location.Status.APPROVED, Location.Status.REJECTED]
    )
    reviewNotes = serializers.CharField(  # noqa: N815
        required=False, allow_blank=True, default=""
    )
