from django.test import SimpleTestCase, override_settings

from onboarding.controller import (
    DISMISS_KEY,
    SECTION_KEY,
    GuidedOnboardingController,
    Phase,
)
from onboarding.stores import InMemoryFlagStore
from profiles.completeness import ProfileCompleteness, SectionScore
from profiles.sections import SECTION_LABELS, SECTION_ORDER


def completeness(**percents):
    """Completeness with the given section percents; unnamed sections are 0."""
    sections = tuple(
        SectionScore(id=sid, label=SECTION_LABELS[sid], percent=percents.get(sid, 0))
        for sid in SECTION_ORDER
    )
    overall = round(sum(s.percent for s in sections) / len(sections))
    return ProfileCompleteness(overall=overall, sections=sections)


ALL_DONE = completeness(**{sid: 100 for sid in SECTION_ORDER})
# overview and pricing done, everything else open
HALFWAY = completeness(overview=100, pricing=100, services=40)


class ControllerTestMixin:
    threshold = 100

    def setUp(self):
        self.store = InMemoryFlagStore()

    def controller(self, value=HALFWAY, account_id=1, threshold=None):
        return GuidedOnboardingController(
            value,
            store=self.store,
            account_id=account_id,
            prompt_threshold=self.threshold if threshold is None else threshold,
        )


class SectionLookupTests(ControllerTestMixin, SimpleTestCase):
    def test_incomplete_sections_in_canonical_order(self):
        c = self.controller()
        self.assertEqual(
            c.incomplete_sections, ("screening", "services", "gallery", "about", "payment")
        )
        self.assertEqual(c.first_incomplete_section, "screening")

    def test_next_skips_completed_sections(self):
        c = self.controller(completeness(overview=100, pricing=100, screening=100))
        self.assertEqual(c.get_next_section("overview"), "services")
        self.assertEqual(c.get_next_section("services"), "gallery")

    def test_next_from_last_section_is_none(self):
        self.assertIsNone(self.controller().get_next_section("payment"))

    def test_prev_is_canonical_neighbour_even_if_complete(self):
        c = self.controller()
        self.assertEqual(c.get_prev_section("services"), "screening")
        self.assertEqual(c.get_prev_section("screening"), "pricing")
        self.assertIsNone(c.get_prev_section("overview"))

    def test_step_numbers_are_fixed(self):
        c = self.controller()
        self.assertEqual(c.get_step_number("overview"), 1)
        self.assertEqual(c.get_step_number("screening"), 3)
        self.assertEqual(c.get_step_number("payment"), 7)
        self.assertEqual(c.total_steps, 7)
        # unabhängig vom Fortschritt
        self.assertEqual(self.controller(ALL_DONE).get_step_number("screening"), 3)

    def test_unknown_ids_answer_none(self):
        c = self.controller()
        for bogus in ("reviews", "", None, 3):
            self.assertIsNone(c.get_next_section(bogus))
            self.assertIsNone(c.get_prev_section(bogus))
            self.assertIsNone(c.get_step_number(bogus))


class PromptTests(ControllerTestMixin, SimpleTestCase):
    def test_incomplete_profile_is_prompt_eligible(self):
        c = self.controller()
        self.assertTrue(c.should_prompt)
        self.assertEqual(c.phase, Phase.PROMPT_ELIGIBLE)

    def test_complete_profile_is_idle(self):
        c = self.controller(ALL_DONE)
        self.assertFalse(c.should_prompt)
        self.assertEqual(c.phase, Phase.IDLE)
        self.assertEqual(c.incomplete_sections, ())
        self.assertIsNone(c.first_incomplete_section)

    def test_threshold_limits_prompt(self):
        # HALFWAY overall = round(240 / 7) = 34
        self.assertFalse(self.controller(threshold=30).should_prompt)
        self.assertTrue(self.controller(threshold=35).should_prompt)

    @override_settings(ONBOARDING_PROMPT_THRESHOLD=20)
    def test_threshold_defaults_to_setting(self):
        c = GuidedOnboardingController(HALFWAY, store=self.store, account_id=1)
        self.assertFalse(c.should_prompt)

    def test_dismiss_persists_for_new_controller(self):
        self.controller().dismiss()
        c = self.controller()
        self.assertTrue(c.dismissed)
        self.assertFalse(c.should_prompt)
        self.assertEqual(c.phase, Phase.DISMISSED)
        self.assertIs(self.store.get(1, DISMISS_KEY), True)

    def test_dismiss_is_scoped_per_account(self):
        self.controller(account_id=1).dismiss()
        other = self.controller(account_id=2)
        self.assertFalse(other.dismissed)
        self.assertTrue(other.should_prompt)

    def test_reset_clears_dismissal(self):
        self.controller().dismiss()
        state = self.controller().reset()
        self.assertFalse(state.dismissed)
        self.assertEqual(state.phase, Phase.PROMPT_ELIGIBLE)
        self.assertIsNone(self.store.get(1, DISMISS_KEY))
        self.assertTrue(self.controller().should_prompt)


class GuidedFlowTests(ControllerTestMixin, SimpleTestCase):
    def test_start_opens_first_incomplete_section(self):
        state = self.controller().start_guided()
        self.assertTrue(state.is_guided_active)
        self.assertEqual(state.phase, Phase.ACTIVE)
        self.assertEqual(state.current_section, "screening")
        self.assertEqual(state.step_number, 3)
        self.assertEqual(state.total_steps, 7)
        self.assertEqual(state.previous_section, "pricing")
        self.assertEqual(state.next_section, "services")
        self.assertFalse(state.is_last_step)
        self.assertFalse(state.should_prompt)
        self.assertEqual(self.store.get(1, SECTION_KEY), "screening")

    def test_start_while_active_keeps_position(self):
        c = self.controller()
        c.start_guided()
        c.skip()
        state = c.start_guided()
        self.assertEqual(state.current_section, "services")

    def test_start_with_nothing_incomplete_is_noop(self):
        state = self.controller(ALL_DONE).start_guided()
        self.assertFalse(state.is_guided_active)
        self.assertIsNone(state.current_section)
        self.assertIsNone(self.store.get(1, SECTION_KEY))

    def test_start_after_dismiss_is_noop(self):
        c = self.controller()
        c.dismiss()
        self.assertFalse(c.start_guided().is_guided_active)

    def test_dismiss_closes_open_stepper(self):
        c = self.controller()
        c.start_guided()
        state = c.dismiss()
        self.assertFalse(state.is_guided_active)
        self.assertEqual(state.phase, Phase.DISMISSED)
        self.assertIsNone(self.store.get(1, SECTION_KEY))

    def test_skip_moves_to_next_incomplete(self):
        c = self.controller()
        c.start_guided()
        self.assertEqual(c.skip().current_section, "services")
        self.assertEqual(c.skip().current_section, "gallery")

    def test_skip_on_last_section_finishes(self):
        c = self.controller(completeness(overview=100, pricing=100, screening=100,
                                         services=100, gallery=100, about=100))
        state = c.start_guided()
        self.assertEqual(state.current_section, "payment")
        self.assertTrue(state.is_last_step)
        self.assertIsNone(state.next_section)
        state = c.skip()
        self.assertFalse(state.is_guided_active)
        self.assertIsNone(self.store.get(1, SECTION_KEY))

    def test_go_back_visits_completed_sections(self):
        c = self.controller()
        c.start_guided()
        state = c.go_back()
        self.assertEqual(state.current_section, "pricing")
        self.assertEqual(c.go_back().current_section, "overview")
        # am Anfang bleibt es stehen
        self.assertEqual(c.go_back().current_section, "overview")

    def test_go_back_when_inactive_is_noop(self):
        c = self.controller()
        self.assertIsNone(c.go_back().current_section)

    def test_advance_after_save_uses_refreshed_completeness(self):
        c = self.controller()
        c.start_guided()
        c.refresh(completeness(overview=100, pricing=100, screening=100, gallery=100))
        state = c.advance("screening")
        self.assertEqual(state.current_section, "services")
        self.assertEqual(state.next_section, "about")

    def test_advance_when_inactive_is_noop(self):
        state = self.controller().advance("screening")
        self.assertFalse(state.is_guided_active)

    def test_stop_closes_without_dismissing(self):
        c = self.controller()
        c.start_guided()
        state = c.stop_guided()
        self.assertFalse(state.is_guided_active)
        self.assertFalse(state.dismissed)
        self.assertEqual(state.phase, Phase.PROMPT_ELIGIBLE)

    def test_restart_after_stop_opens_first_incomplete_section(self):
        c = self.controller()
        c.start_guided()
        c.skip()
        c.stop_guided()
        self.assertIsNone(self.store.get(1, SECTION_KEY))

        # neue Sitzung: alte Position darf nicht wieder auftauchen
        fresh = self.controller()
        self.assertIsNone(fresh.current_section)
        state = fresh.start_guided()
        self.assertEqual(state.current_section, fresh.first_incomplete_section)
        self.assertEqual(state.current_section, "screening")

    def test_position_survives_new_controller(self):
        self.controller().start_guided()
        c = self.controller()
        self.assertTrue(c.is_guided_active)
        self.assertEqual(c.current_section, "screening")

    def test_invalid_stored_pointer_is_ignored(self):
        self.store.set(1, SECTION_KEY, "reviews")
        c = self.controller()
        self.assertFalse(c.is_guided_active)
        self.assertIsNone(c.current_section)
        self.assertEqual(c.start_guided().current_section, "screening")

    def test_snapshot_lists_incomplete_sections(self):
        state = self.controller().snapshot()
        self.assertEqual(state.incomplete_sections[0], "screening")
        self.assertEqual(state.first_incomplete_section, "screening")
        self.assertIsNone(state.step_number)
        self.assertIsNone(state.previous_section)
        self.assertFalse(state.is_last_step)
