from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase

from profiles.models import Profile
from profiles.sections import (
    SECTION_LABELS,
    SECTION_ORDER,
    is_section_id,
    merge_metadata,
    save_section,
    suggested_care_types,
)

User = get_user_model()


class SectionConstantsTests(SimpleTestCase):
    def test_canonical_order(self):
        self.assertEqual(
            SECTION_ORDER,
            ("overview", "pricing", "screening", "services", "gallery", "about", "payment"),
        )

    def test_every_section_has_a_label(self):
        self.assertEqual(set(SECTION_LABELS), set(SECTION_ORDER))

    def test_is_section_id(self):
        self.assertTrue(is_section_id("gallery"))
        self.assertFalse(is_section_id("reviews"))
        self.assertFalse(is_section_id(None))

    def test_suggested_care_types(self):
        self.assertIn("In-Home Care", suggested_care_types("home_care_agency"))
        self.assertEqual(suggested_care_types(""), [])
        self.assertEqual(suggested_care_types("spaceship"), [])


class MergeMetadataTests(SimpleTestCase):
    def test_keeps_sibling_sections(self):
        existing = {"images": ["a.jpg"], "price_range": "$$"}
        merged = merge_metadata(existing, {"price_range": "$$$"})
        self.assertEqual(merged, {"images": ["a.jpg"], "price_range": "$$$"})

    def test_does_not_mutate_existing(self):
        existing = {"images": ["a.jpg"]}
        merge_metadata(existing, {"images": []})
        self.assertEqual(existing, {"images": ["a.jpg"]})

    def test_none_removes_key(self):
        self.assertEqual(merge_metadata({"price_range": "$$"}, {"price_range": None}), {})

    def test_non_dict_existing_starts_fresh(self):
        self.assertEqual(merge_metadata(None, {"images": ["a.jpg"]}), {"images": ["a.jpg"]})
        self.assertEqual(merge_metadata(["junk"], {"bed_count": 3}), {"bed_count": 3})


class SaveSectionTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="sunrise", password="Pass123!")
        self.profile = Profile.objects.create(
            user=self.user,
            type="provider",
            display_name="Sunrise Homecare",
            metadata={"images": ["https://img.example/1.jpg"], "custom_badge": "gold"},
        )

    def test_metadata_is_merged_not_replaced(self):
        saved = save_section(self.profile, metadata={"price_range": "$25-35/hr"})
        self.assertEqual(
            saved.metadata,
            {
                "images": ["https://img.example/1.jpg"],
                "custom_badge": "gold",
                "price_range": "$25-35/hr",
            },
        )
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.metadata["custom_badge"], "gold")

    def test_merge_uses_stored_metadata_not_stale_instance(self):
        # Zweite Instanz mit veraltetem Stand
        stale = Profile.objects.get(pk=self.profile.pk)
        save_section(self.profile, metadata={"year_founded": 2004})
        save_section(stale, metadata={"staff_count": 12})
        self.profile.refresh_from_db()
        self.assertEqual(self.profile.metadata["year_founded"], 2004)
        self.assertEqual(self.profile.metadata["staff_count"], 12)

    def test_top_level_fields_none_becomes_empty_string(self):
        saved = save_section(self.profile, fields={"display_name": None, "phone": "555-0100"})
        self.assertEqual(saved.display_name, "")
        self.assertEqual(saved.phone, "555-0100")

    def test_nothing_to_save_leaves_row_untouched(self):
        before = Profile.objects.get(pk=self.profile.pk).updated_at
        save_section(self.profile)
        self.assertEqual(Profile.objects.get(pk=self.profile.pk).updated_at, before)
