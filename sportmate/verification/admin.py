from django.contrib import admin

from sportmate.verification import models


@admin.register(models.VerificationDocument)
class VerificationDocumentAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "document_type", "review_status", "uploaded_at"]
    list_filter = ["document_type", "review_status"]
    search_fields = ["user__email", "file_name"]
    raw_id_fields = ["user", "reviewed_by"]
