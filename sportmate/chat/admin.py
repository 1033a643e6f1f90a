from django.contrib import admin

from sportmate.chat import models


@admin.register(models.EventMessage)
class EventMessageAdmin(admin.ModelAdmin):
    list_display = ["id", "event", "user", "created_at"]
    search_fields = ["message", "user__email", "event__title"]
    list_filter = ["created_at"]
    raw_id_fields = ["event", "user"]
