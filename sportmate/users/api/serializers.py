from rest_framework import serializers

from sportmate.users.models import User


class UserSummarySerializer(serializers.ModelSerializer[User]):
    """Public author/host fields, in the camelCase shape the client renders."""

    firstName = serializers.CharField(source="first_name", read_only=True)  # noqa: N815
    lastName = serializers.CharField(source="last_name", read_only=True)  # noqa: N815
    profileImageUrl = serializers.CharField(  # noqa: N815
        source="profile_image_url", read_only=True
    )

    class Meta:
        model = User
        fields = ["id", "firstName", "lastName", "profileImageUrl"]


class UserSerializer(serializers.ModelSerializer[User]):
    full_name = serializers.CharField(source="name", read_only=True)
    id = serializers.IntegerField(read_only=True)

    # Identity is owned by the external provider
    username = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "full_name",
            "profile_image_url",
            "gender_identity",
            "sports_interests",
            "skill_level",
            "search_radius",
            "is_verified",
            "verification_status",
            "phone_number",
            "phone_verified",
            "date_of_birth",
            "rep_points",
            "user_tier",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "is_verified",
            "verification_status",
            "phone_verified",
            "rep_points",
            "user_tier",
            "created_at",
            "updated_at",
        ]

    def update(self, instance, validated_data):
        forbidden = {k for k in ("username", "email") if k in self.initial_data}
        if forbidden:
            errors = {
                f: "This field is managed by the identity provider." for f in forbidden
            }
            raise serializers.ValidationError(errors)
        return super().update(instance, validated_data)


class UserPreferencesSerializer(serializers.ModelSerializer[User]):
    sports_interests = serializers.ListField(
        child=serializers.CharField(max_length=50), allow_empty=True
    )

    class Meta:
        model = User
        fields = ["gender_identity", "sports_interests", "skill_level", "search_radius"]

    def validate_search_radius(self, value):
        if value < 1:
            msg = "Search radius must be at least 1 mile."
            raise serializers.ValidationError(msg)
        return value
