"""Profile sections.

A provider profile is edited section by section from the dashboard. This
module holds the canonical section order (also the order of the guided
onboarding stepper), the section labels, and the save helper that writes a
section to the database without clobbering unrelated metadata.
"""

import logging

from django.db import transaction

from .models import Profile

logger = logging.getLogger(__name__)


OVERVIEW = "overview"
PRICING = "pricing"
SCREENING = "screening"
SERVICES = "services"
GALLERY = "gallery"
ABOUT = "about"
PAYMENT = "payment"

# Order matters: guided onboarding walks the sections in exactly this sequence.
SECTION_ORDER = (OVERVIEW, PRICING, SCREENING, SERVICES, GALLERY, ABOUT, PAYMENT)

SECTION_LABELS = {
    OVERVIEW: "Profile overview",
    PRICING: "Pricing",
    SCREENING: "Staff screening",
    SERVICES: "Care services",
    GALLERY: "Gallery",
    ABOUT: "About",
    PAYMENT: "Accepted Payments & Insurance",
}

# Care services suggested for a category when the provider has not listed any.
CATEGORY_CARE_TYPES = {
    "home_care_agency": ["In-Home Care", "Certified Caregivers", "Companionship", "Light Housekeeping"],
    "home_health_agency": ["Skilled Nursing", "Health Monitoring", "In-Home Care", "Licensed Providers"],
    "hospice_agency": ["Nursing Care", "Wellness Support", "Community Resources", "Medication Management"],
    "inpatient_hospice": ["Nursing Care", "Medical Support", "Community Resources", "Wellness Programs"],
    "assisted_living": ["Licensed Community", "Social Activities", "Health Services", "Light Housekeeping"],
    "memory_care": ["Licensed Community", "Certified Staff", "Health Monitoring", "Social Activities"],
    "independent_living": ["Community Living", "Social Activities", "Light Housekeeping", "Wellness Programs"],
    "nursing_home": ["Skilled Nursing", "Licensed Facility", "Medical Care", "Rehabilitation"],
    "rehab_facility": ["Rehabilitation", "Medical Care", "Licensed Facility", "Exercise & Wellness"],
    "adult_day_care": ["Social Activities", "Health Services", "Community Programs", "Light Housekeeping"],
    "wellness_center": ["Exercise & Wellness", "Health Services", "Community Programs", "Certified Staff"],
    "private_caregiver": ["Certified Caregiver", "In-Home Care", "Companionship", "Light Housekeeping"],
}


def is_section_id(value) -> bool:
    return value in SECTION_ORDER


def suggested_care_types(category: str) -> list:
    """Default care services for a provider category (empty for unknown)."""
    return list(CATEGORY_CARE_TYPES.get(category or "", []))


def merge_metadata(existing, updates: dict) -> dict:
    """
    Shallow-merge section keys into the existing metadata object.

    Keys not mentioned in `updates` are kept as they are. A key updated to
    None is removed.
    """
    merged = dict(existing) if isinstance(existing, dict) else {}
    for key, value in updates.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


@transaction.atomic
def save_section(profile: Profile, *, fields=None, metadata=None) -> Profile:
    """
    Persist one section of a profile and return the fresh instance.

    Top-level `fields` are assigned directly (None -> ''). `metadata` is merged
    into whatever is stored right now, with the row locked for the duration of
    the read-merge-write.
    """
    locked = Profile.objects.select_for_update().get(pk=profile.pk)
    update_fields = []

    for attr, val in (fields or {}).items():
        setattr(locked, attr, val if val is not None else "")
        update_fields.append(attr)

    if metadata:
        locked.metadata = merge_metadata(locked.metadata, metadata)
        update_fields.append("metadata")

    if update_fields:
        locked.save(update_fields=update_fields + ["updated_at"])
        logger.info(
            "Saved profile %s fields=%s metadata_keys=%s",
            locked.pk,
            sorted(fields or {}),
            sorted(metadata or {}),
        )
    return locked
