"""Profiles app models.

Defines the Profile model that extends the base user with the public record of
a care provider (or the lighter record of a family). String fields
intentionally default to empty strings to avoid nulls in API responses.
Optional, section-grouped data lives in the `metadata` JSON object.
"""

from django.db import models
from django.conf import settings


class Profile(models.Model):
    """
    Profile for a single user.

    Stores general information for both family and provider accounts.
    A profile is created at most once per user (OneToOne relationship).
    """

    USER_TYPES = (("family", "family"), ("provider", "provider"))

    class Category(models.TextChoices):
        HOME_CARE_AGENCY = "home_care_agency", "Home Care"
        HOME_HEALTH_AGENCY = "home_health_agency", "Home Health"
        HOSPICE_AGENCY = "hospice_agency", "Hospice"
        INDEPENDENT_LIVING = "independent_living", "Independent Living"
        ASSISTED_LIVING = "assisted_living", "Assisted Living"
        MEMORY_CARE = "memory_care", "Memory Care"
        NURSING_HOME = "nursing_home", "Nursing Home"
        INPATIENT_HOSPICE = "inpatient_hospice", "Inpatient Hospice"
        REHAB_FACILITY = "rehab_facility", "Rehabilitation"
        ADULT_DAY_CARE = "adult_day_care", "Adult Day Care"
        WELLNESS_CENTER = "wellness_center", "Wellness Center"
        PRIVATE_CAREGIVER = "private_caregiver", "Private Caregiver"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    type = models.CharField(
        max_length=20,
        choices=USER_TYPES,
        blank=True,
        default="",
    )
    display_name = models.CharField(max_length=200, blank=True, default="")
    slug = models.SlugField(max_length=220, blank=True, default="")
    description = models.TextField(blank=True, default="")
    address = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    state = models.CharField(max_length=60, blank=True, default="")
    zip_code = models.CharField(max_length=20, blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    website = models.URLField(blank=True, default="")
    category = models.CharField(
        max_length=40,
        choices=Category.choices,
        blank=True,
        default="",
    )
    care_types = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=500, blank=True, default="")
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-updated_at", "-id")

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.user_id}:{self.display_name or self.user.username}>"

    @property
    def is_provider(self) -> bool:
        return self.type == "provider"
