import django.db.models.deletion
from django.conf import settings
from django.db import migrations
from django.db import models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Location",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("address", models.CharField(max_length=500)),
                ("latitude", models.DecimalField(decimal_places=8, max_digits=10)),
                ("longitude", models.DecimalField(decimal_places=8, max_digits=11)),
                (
                    "location_type",
                    models.CharField(
                        choices=[
                            ("public_park", "Public park"),
                            ("school", "School"),
                            ("gym", "Gym"),
                            ("court", "Court"),
                            ("field", "Field"),
                            ("other", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                ("photo_url", models.URLField(blank=True, default="", max_length=500)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "approval_tier",
                    models.CharField(
                        choices=[
                            ("tier_1", "Automatic"),
                            ("tier_2", "Manual review"),
                            ("tier_3", "Partnership"),
                        ],
                        default="tier_2",
                        max_length=10,
                    ),
                ),
                ("review_notes", models.TextField(blank=True, default="")),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("is_public_space", models.BooleanField(default=False)),
                ("requires_permit", models.BooleanField(default=False)),
                ("max_capacity", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "amenities",
                    models.JSONField(
                        blank=True, default=list, help_text="parking, restrooms, lights"
                    ),
                ),
                (
                    "operating_hours",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="dawn_to_dusk, 24_hours",
                        max_length=50,
                    ),
                ),
                (
                    "contact_info",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "reviewed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="reviewed_locations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "submitted_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="submitted_locations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
