import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "type",
                    models.CharField(
                        blank=True,
                        choices=[("family", "family"), ("provider", "provider")],
                        default="",
                        max_length=20,
                    ),
                ),
                ("display_name", models.CharField(blank=True, default="", max_length=200)),
                ("slug", models.SlugField(blank=True, default="", max_length=220)),
                ("description", models.TextField(blank=True, default="")),
                ("address", models.CharField(blank=True, default="", max_length=255)),
                ("city", models.CharField(blank=True, default="", max_length=120)),
                ("state", models.CharField(blank=True, default="", max_length=60)),
                ("zip_code", models.CharField(blank=True, default="", max_length=20)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("website", models.URLField(blank=True, default="")),
                (
                    "category",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("home_care_agency", "Home Care"),
                            ("home_health_agency", "Home Health"),
                            ("hospice_agency", "Hospice"),
                            ("independent_living", "Independent Living"),
                            ("assisted_living", "Assisted Living"),
                            ("memory_care", "Memory Care"),
                            ("nursing_home", "Nursing Home"),
                            ("inpatient_hospice", "Inpatient Hospice"),
                            ("rehab_facility", "Rehabilitation"),
                            ("adult_day_care", "Adult Day Care"),
                            ("wellness_center", "Wellness Center"),
                            ("private_caregiver", "Private Caregiver"),
                        ],
                        default="",
                        max_length=40,
                    ),
                ),
                ("care_types", models.JSONField(blank=True, default=list)),
                ("image_url", models.URLField(blank=True, default="", max_length=500)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ("-updated_at", "-id"),
            },
        ),
    ]
