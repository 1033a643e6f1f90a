from django.contrib import admin

from sportmate.events import models


@admin.register(models.Event)
class EventAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "title",
        "sport_type",
        "host",
        "event_date",
        "current_players",
        "max_players",
        "is_approved",
        "is_canceled",
    ]
    list_filter = ["sport_type", "skill_level", "is_approved", "is_canceled"]
    search_fields = ["title", "location_name", "host__email"]
    raw_id_fields = ["host"]


@admin.register(models.EventRsvp)
class EventRsvpAdmin(admin.ModelAdmin):
    list_display = ["id", "event", "user", "status", "joined_at"]
    list_filter = ["status"]
    raw_id_fields = ["event", "user"]


@admin.register(models.UserSwipe)
class UserSwipeAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "event", "direction", "swiped_at"]
    list_filter = ["direction"]
    raw_id_fields = ["event", "user"]
