from django.contrib import admin

from sportmate.rep import models


@admin.register(models.RepActivity)
class RepActivityAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "activity_type", "points_earned", "created_at"]
    list_filter = ["activity_type", "created_at"]
    search_fields = ["user__email", "description"]
