from django.contrib import admin
from django.contrib.auth import admin as auth_admin
from django.utils.translation import gettext_lazy as _

from sportmate.users.models import User


@admin.register(User)
class UserAdmin(auth_admin.UserAdmin):
    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (
            _("Personal info"),
            {"fields": ("first_name", "last_name", "email", "profile_image_url")},
        ),
        (
            _("Preferences"),
            {
                "fields": (
                    "gender_identity",
                    "sports_interests",
                    "skill_level",
                    "search_radius",
                ),
            },
        ),
        (
            _("Verification"),
            {
                "fields": (
                    "verification_status",
                    "is_verified",
                    "has_completed_verification",
                    "phone_number",
                    "phone_verified",
                    "date_of_birth",
                ),
            },
        ),
        (_("Rep"), {"fields": ("rep_points", "user_tier")}),
        (
            _("Permissions"),
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )
    list_display = ["username", "email", "name", "verification_status", "user_tier"]
    list_filter = ["verification_status", "user_tier", "is_staff"]
    search_fields = ["name", "email", "username"]
