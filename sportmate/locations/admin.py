from django.contrib import admin

from sportmate.locations import models


@admin.register(models.Location)
class LocationAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "name",
        "location_type",
        "status",
        "approval_tier",
        "submitted_by",
        "created_at",
    ]
    list_filter = ["status", "location_type", "approval_tier", "is_public_space"]
    search_fields = ["name", "address", "submitted_by__email"]
    raw_id_fields = ["submitted_by", "reviewed_by"]
