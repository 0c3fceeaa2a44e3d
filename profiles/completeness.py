"""Profile completeness scoring.

Every dashboard section is scored from a weighted checklist of presence
checks; the overall score is the rounded mean of the section scores. All
weights are positive, so filling in a field can only raise a score.

Inputs are read leniently: the profile may be a Profile instance or a plain
mapping, metadata may be empty, and values of the wrong type count as "not
provided". Nothing in here raises for missing data.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from .sections import (
    ABOUT,
    GALLERY,
    OVERVIEW,
    PAYMENT,
    PRICING,
    SCREENING,
    SECTION_LABELS,
    SECTION_ORDER,
    SERVICES,
)

DESCRIPTION_FULL_LENGTH = 100

STATUS_TEXTS = (
    (100, "ALL DONE!"),
    (76, "NEARLY COMPLETE!"),
    (51, "LOOKING GOOD!"),
    (26, "ALMOST THERE!"),
    (0, "JUST GETTING STARTED"),
)


@dataclass(frozen=True)
class SectionScore:
    id: str
    label: str
    percent: int


@dataclass(frozen=True)
class ProfileCompleteness:
    """Overall score plus one entry per section, in canonical order."""

    overall: int
    sections: tuple

    def percent_for(self, section_id: str) -> int:
        for section in self.sections:
            if section.id == section_id:
                return section.percent
        return 0

    @property
    def status(self) -> str:
        return completeness_status(self.overall)


# ------------------------------ helpers ------------------------------

def _clamp(value) -> int:
    return min(100, max(0, round(value)))


def _value(source, name):
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _filled(item) -> bool:
    return bool(_text(item)) if isinstance(item, str) else bool(item)


def _count(value) -> int:
    if not isinstance(value, (list, tuple)):
        return 0
    return sum(1 for item in value if _filled(item))


def _provided(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return bool(value)
    return True


def _score(checks) -> int:
    total = sum(weight for weight, _ in checks)
    if not total:
        return 0
    earned = sum(weight for weight, satisfied in checks if satisfied)
    return _clamp(earned * 100 / total)


# --------------------------- section scorers ---------------------------

def score_overview(profile) -> int:
    has_location = bool(_text(_value(profile, "address"))) or bool(
        _text(_value(profile, "city")) and _text(_value(profile, "state"))
    )
    return _score((
        (20, bool(_text(_value(profile, "display_name")))),
        (15, bool(_text(_value(profile, "category")))),
        (20, has_location),
        (15, bool(_text(_value(profile, "phone")))),
        (10, bool(_text(_value(profile, "email")))),
        (10, bool(_text(_value(profile, "website")))),
        (10, bool(_text(_value(profile, "image_url")))),
    ))


def score_pricing(meta) -> int:
    published = bool(_text(meta.get("price_range"))) or meta.get("contact_for_pricing") is True
    return _score((
        (50, published),
        (50, _count(meta.get("pricing_details")) >= 1),
    ))


def score_screening(meta) -> int:
    screening = meta.get("staff_screening")
    if not isinstance(screening, Mapping):
        return 0
    return _score((
        (34, screening.get("background_checked") is True),
        (33, screening.get("licensed") is True),
        (33, screening.get("insured") is True),
    ))


def score_services(profile) -> int:
    count = _count(_value(profile, "care_types"))
    return _score((
        (50, count >= 1),
        (50, count >= 5),
    ))


def score_gallery(meta) -> int:
    count = _count(meta.get("images"))
    return _score(tuple((25, count >= threshold) for threshold in (1, 3, 5, 8)))


def score_about(profile, meta) -> int:
    description = _text(_value(profile, "description"))
    return _score((
        (30, bool(description)),
        (20, len(description) >= DESCRIPTION_FULL_LENGTH),
        (15, _provided(meta.get("year_founded"))),
        (15, _provided(meta.get("staff_count")) or _provided(meta.get("bed_count"))),
        (20, _provided(meta.get("license_number"))),
    ))


def score_payment(meta) -> int:
    count = _count(meta.get("accepted_payments"))
    return _score((
        (40, count >= 1),
        (30, count >= 3),
        (15, isinstance(meta.get("accepts_medicare"), bool)),
        (15, isinstance(meta.get("accepts_medicaid"), bool)),
    ))


# ------------------------------ aggregate ------------------------------

def calculate_profile_completeness(profile, metadata=None) -> ProfileCompleteness:
    """Score all sections of `profile` and aggregate them."""
    meta = metadata if isinstance(metadata, Mapping) else {}
    percents = {
        OVERVIEW: score_overview(profile),
        PRICING: score_pricing(meta),
        SCREENING: score_screening(meta),
        SERVICES: score_services(profile),
        GALLERY: score_gallery(meta),
        ABOUT: score_about(profile, meta),
        PAYMENT: score_payment(meta),
    }
    sections = tuple(
        SectionScore(id=section_id, label=SECTION_LABELS[section_id], percent=percents[section_id])
        for section_id in SECTION_ORDER
    )
    overall = _clamp(sum(s.percent for s in sections) / len(sections))
    return ProfileCompleteness(overall=overall, sections=sections)


def completeness_for(profile) -> ProfileCompleteness:
    """Shortcut for a Profile instance carrying its own metadata."""
    return calculate_profile_completeness(profile, profile.metadata)


def completeness_status(overall: int) -> str:
    """Short encouragement shown next to the overall score."""
    for minimum, text in STATUS_TEXTS:
        if overall >= minimum:
            return text
    return STATUS_TEXTS[-1][1]
