"""Profiles API serializers.

Contains serializers for:
- reading a profile,
- partially updating a profile (owner-only),
- listing provider profiles,
- the completeness summary shown in the dashboard sidebar,
- one input serializer per dashboard section (see `SECTION_SERIALIZERS`).

Serializers ensure string fields never return `null` in responses, but empty
strings instead.
"""

from rest_framework import serializers

from ..models import Profile
from ..sections import (
    ABOUT,
    GALLERY,
    OVERVIEW,
    PAYMENT,
    PRICING,
    SCREENING,
    SERVICES,
    save_section,
    suggested_care_types,
)


# ------------------------------ helpers ------------------------------

def _coalesce_fields(data: dict, keys: set):
    for k in keys:
        if data.get(k) is None:
            data[k] = ""


def _strip_list(values) -> list:
    return [v.strip() for v in values if v and v.strip()]


def _ensure_str_list(value):
    if not isinstance(value, list):
        raise serializers.ValidationError("Must be an array of strings.")
    if any(not isinstance(x, str) for x in value):
        raise serializers.ValidationError("All entries must be strings.")


PROFILE_FIELDS = [
    "user",
    "username",
    "type",
    "display_name",
    "slug",
    "description",
    "address",
    "city",
    "state",
    "zip_code",
    "phone",
    "email",
    "website",
    "category",
    "care_types",
    "image_url",
]

_TEXT_FIELDS = {
    "display_name",
    "slug",
    "description",
    "address",
    "city",
    "state",
    "zip_code",
    "phone",
    "email",
    "website",
    "category",
    "image_url",
}


# ------------------------------ serializers ------------------------------

class ProfilePatchSerializer(serializers.ModelSerializer):
    """
    Partial update of the caller's own profile (top-level columns only).
    Metadata is written through the section endpoints so it is always merged.
    """

    username = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = Profile
        fields = PROFILE_FIELDS + ["created_at", "updated_at"]
        read_only_fields = ["user", "username", "created_at", "updated_at"]
        extra_kwargs = {
            name: {"required": False, "allow_blank": True, "allow_null": True}
            for name in _TEXT_FIELDS | {"type"}
        }

    def validate_care_types(self, value):
        """Ensure care_types is a list of strings."""
        _ensure_str_list(value)
        return value

    def update(self, instance: Profile, validated_data):
        """
        Save only the provided columns (None -> '').

        Goes through `save_section` so the row is locked and re-read; metadata
        stored meanwhile by a section save is never written back stale.
        """
        fields = dict(validated_data)
        if "care_types" in fields:
            fields["care_types"] = _strip_list(fields["care_types"] or [])
        return save_section(instance, fields=fields)

    def to_representation(self, instance: Profile):
        data = super().to_representation(instance)
        _coalesce_fields(data, _TEXT_FIELDS)
        return data


class ProfileDetailSerializer(serializers.ModelSerializer):
    """Read-only detail serializer including the metadata object."""

    username = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = Profile
        fields = PROFILE_FIELDS + ["metadata", "created_at", "updated_at"]
        read_only_fields = fields

    def to_representation(self, instance: Profile):
        data = super().to_representation(instance)
        _coalesce_fields(data, _TEXT_FIELDS)
        if not isinstance(data.get("metadata"), dict):
            data["metadata"] = {}
        return data


class ProviderProfileListSerializer(serializers.ModelSerializer):
    """List serializer for provider profiles (no nulls for text fields)."""

    username = serializers.CharField(source="user.username", read_only=True)

    class Meta:
        model = Profile
        fields = PROFILE_FIELDS

    def to_representation(self, instance):
        data = super().to_representation(instance)
        _coalesce_fields(data, _TEXT_FIELDS)
        return data


class SectionScoreSerializer(serializers.Serializer):
    id = serializers.CharField()
    label = serializers.CharField()
    percent = serializers.IntegerField()


class ProfileCompletenessSerializer(serializers.Serializer):
    """Serializes a ProfileCompleteness value (overall, status, sections)."""

    overall = serializers.IntegerField()
    status = serializers.CharField()
    sections = SectionScoreSerializer(many=True)


# ------------------------------ section input ------------------------------

class SectionSerializer(serializers.Serializer):
    """
    Base for section payloads.

    Every field is optional; absent fields are left untouched. Names listed in
    `profile_fields` are profile columns, everything else is a metadata key.
    """

    profile_fields = ()

    def split(self):
        """Return (profile column updates, metadata updates)."""
        data = dict(self.validated_data)
        fields = {name: data.pop(name) for name in self.profile_fields if name in data}
        return fields, data


class OverviewSectionSerializer(SectionSerializer):
    profile_fields = (
        "display_name",
        "category",
        "address",
        "city",
        "state",
        "zip_code",
        "phone",
        "email",
        "website",
        "image_url",
    )

    display_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=Profile.Category.choices, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=120, required=False, allow_blank=True)
    state = serializers.CharField(max_length=60, required=False, allow_blank=True)
    zip_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    website = serializers.URLField(required=False, allow_blank=True)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)


class PricingRowSerializer(serializers.Serializer):
    service = serializers.CharField(max_length=200)
    rate = serializers.CharField(max_length=50)
    rateType = serializers.CharField(max_length=50, allow_blank=True, default="")


class PricingSectionSerializer(SectionSerializer):
    price_range = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    pricing_details = PricingRowSerializer(many=True, required=False)
    contact_for_pricing = serializers.BooleanField(required=False, allow_null=True)

    def validate_pricing_details(self, rows):
        return [dict(row) for row in rows]


class StaffScreeningSerializer(serializers.Serializer):
    background_checked = serializers.BooleanField(required=False)
    licensed = serializers.BooleanField(required=False)
    insured = serializers.BooleanField(required=False)


class ScreeningSectionSerializer(SectionSerializer):
    staff_screening = StaffScreeningSerializer(required=False)

    def validate_staff_screening(self, value):
        # Stored as one object; a flag left out of the payload means "no".
        return {
            flag: bool(value.get(flag, False))
            for flag in ("background_checked", "licensed", "insured")
        }


class ServicesSectionSerializer(SectionSerializer):
    """
    Care services offered. With `use_category_defaults` and no explicit list,
    the defaults for the provider's category are stored.
    """

    profile_fields = ("care_types",)

    care_types = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False, allow_empty=True
    )
    use_category_defaults = serializers.BooleanField(required=False, write_only=True)

    def validate(self, attrs):
        use_defaults = attrs.pop("use_category_defaults", False)
        care_types = _strip_list(attrs.get("care_types", []))
        if use_defaults and not care_types:
            profile = self.context.get("profile")
            category = getattr(profile, "category", "")
            if not category:
                raise serializers.ValidationError(
                    {"use_category_defaults": "Set a category first to use its default services."}
                )
            care_types = suggested_care_types(category)
        if "care_types" in attrs or use_defaults:
            attrs["care_types"] = list(dict.fromkeys(care_types))
        return attrs


class GallerySectionSerializer(SectionSerializer):
    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False, allow_empty=True)


class AboutSectionSerializer(SectionSerializer):
    profile_fields = ("description",)

    description = serializers.CharField(required=False, allow_blank=True)
    year_founded = serializers.IntegerField(min_value=1800, max_value=2100, required=False, allow_null=True)
    bed_count = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    staff_count = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    license_number = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)


class PaymentSectionSerializer(SectionSerializer):
    accepted_payments = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False, allow_empty=True
    )
    accepts_medicare = serializers.BooleanField(required=False, allow_null=True)
    accepts_medicaid = serializers.BooleanField(required=False, allow_null=True)

    def validate_accepted_payments(self, value):
        return list(dict.fromkeys(_strip_list(value)))


SECTION_SERIALIZERS = {
    OVERVIEW: OverviewSectionSerializer,
    PRICING: PricingSectionSerializer,
    SCREENING: ScreeningSectionSerializer,
    SERVICES: ServicesSectionSerializer,
    GALLERY: GallerySectionSerializer,
    ABOUT: AboutSectionSerializer,
    PAYMENT: PaymentSectionSerializer,
}
