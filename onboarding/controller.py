"""Guided onboarding.

The provider dashboard can walk a provider through the incomplete sections of
their profile one at a time (a modal stepper with Back / Skip / Save & Next /
Finish). GuidedOnboardingController decides whether to offer that flow and
keeps the stepper's position.

States:

- idle: nothing to show.
- prompt_eligible: profile below the prompt threshold and not dismissed; the
  dashboard shows a banner.
- active: the stepper is open on `current_section`.
- dismissed: the provider closed the banner for good (until `reset`).

Step numbers always follow the canonical section order, so "screening" is
step 3 of 7 whether or not earlier sections are done. Unknown section ids are
answered with None, never an exception.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from django.conf import settings

from profiles.completeness import ProfileCompleteness
from profiles.sections import SECTION_ORDER, is_section_id

from .stores import FlagStore

logger = logging.getLogger(__name__)

DISMISS_KEY = "dashboard_onboarding_dismissed"
SECTION_KEY = "dashboard_onboarding_section"


class Phase(str, Enum):
    IDLE = "idle"
    PROMPT_ELIGIBLE = "prompt_eligible"
    ACTIVE = "active"
    DISMISSED = "dismissed"


@dataclass(frozen=True)
class GuidedOnboardingState:
    phase: Phase
    is_guided_active: bool
    dismissed: bool
    should_prompt: bool
    current_section: str | None
    step_number: int | None
    total_steps: int
    incomplete_sections: tuple
    first_incomplete_section: str | None
    previous_section: str | None
    next_section: str | None
    is_last_step: bool


class GuidedOnboardingController:
    """
    State machine for the guided onboarding stepper of one account.

    Stored values (dismissal flag, current section) are read once on
    construction and written on every change. Completeness is supplied by the
    caller; after a section save call `refresh` with the recomputed value
    before advancing.
    """

    total_steps = len(SECTION_ORDER)

    def __init__(
        self,
        completeness: ProfileCompleteness,
        *,
        store: FlagStore,
        account_id,
        prompt_threshold: int | None = None,
    ):
        self._completeness = completeness
        self._store = store
        self._account_id = account_id
        if prompt_threshold is None:
            prompt_threshold = getattr(settings, "ONBOARDING_PROMPT_THRESHOLD", 100)
        self._threshold = prompt_threshold

        self._dismissed = store.get(account_id, DISMISS_KEY, False) is True
        pointer = store.get(account_id, SECTION_KEY)
        self._current = pointer if is_section_id(pointer) else None

    # ----------------------------- derived state -----------------------------

    @property
    def completeness(self) -> ProfileCompleteness:
        return self._completeness

    @property
    def incomplete_sections(self) -> tuple:
        return tuple(sid for sid in SECTION_ORDER if not self._is_complete(sid))

    @property
    def first_incomplete_section(self):
        incomplete = self.incomplete_sections
        return incomplete[0] if incomplete else None

    @property
    def current_section(self):
        return self._current

    @property
    def is_guided_active(self) -> bool:
        return self._current is not None

    @property
    def dismissed(self) -> bool:
        return self._dismissed

    @property
    def should_prompt(self) -> bool:
        return (
            not self._dismissed
            and not self.is_guided_active
            and self._completeness.overall < self._threshold
            and bool(self.incomplete_sections)
        )

    @property
    def phase(self) -> Phase:
        if self.is_guided_active:
            return Phase.ACTIVE
        if self._dismissed:
            return Phase.DISMISSED
        if self.should_prompt:
            return Phase.PROMPT_ELIGIBLE
        return Phase.IDLE

    # -------------------------------- lookups --------------------------------

    def get_next_section(self, current):
        """Next incomplete section after `current` in canonical order, or None."""
        if not is_section_id(current):
            return None
        index = SECTION_ORDER.index(current)
        for section_id in SECTION_ORDER[index + 1:]:
            if not self._is_complete(section_id):
                return section_id
        return None

    def get_prev_section(self, current):
        """Section right before `current` in canonical order, done or not."""
        if not is_section_id(current):
            return None
        index = SECTION_ORDER.index(current)
        return SECTION_ORDER[index - 1] if index > 0 else None

    def get_step_number(self, section_id):
        if not is_section_id(section_id):
            return None
        return SECTION_ORDER.index(section_id) + 1

    # ------------------------------ transitions ------------------------------

    def start_guided(self) -> GuidedOnboardingState:
        if self.is_guided_active or self._dismissed:
            return self.snapshot()
        first = self.first_incomplete_section
        if first is None:
            return self.snapshot()
        self._move_to(first)
        logger.info("Guided onboarding started for account %s at %s", self._account_id, first)
        return self.snapshot()

    def stop_guided(self) -> GuidedOnboardingState:
        if self.is_guided_active:
            self._move_to(None)
            logger.info("Guided onboarding stopped for account %s", self._account_id)
        return self.snapshot()

    def dismiss(self) -> GuidedOnboardingState:
        self._store.set(self._account_id, DISMISS_KEY, True)
        self._dismissed = True
        if self.is_guided_active:
            self._move_to(None)
        logger.info("Onboarding prompt dismissed for account %s", self._account_id)
        return self.snapshot()

    def reset(self) -> GuidedOnboardingState:
        self._store.delete(self._account_id, DISMISS_KEY)
        self._dismissed = False
        return self.snapshot()

    def refresh(self, completeness: ProfileCompleteness) -> GuidedOnboardingState:
        self._completeness = completeness
        return self.snapshot()

    def advance(self, section_id) -> GuidedOnboardingState:
        """Leave `section_id` (saved or skipped) for the next incomplete one."""
        if not self.is_guided_active:
            return self.snapshot()
        following = self.get_next_section(section_id)
        if following is None:
            logger.info("Guided onboarding finished for account %s", self._account_id)
            return self.stop_guided()
        self._move_to(following)
        return self.snapshot()

    def skip(self) -> GuidedOnboardingState:
        if not self.is_guided_active:
            return self.snapshot()
        return self.advance(self._current)

    def go_back(self) -> GuidedOnboardingState:
        previous = self.get_prev_section(self._current)
        if self.is_guided_active and previous is not None:
            self._move_to(previous)
        return self.snapshot()

    def snapshot(self) -> GuidedOnboardingState:
        current = self._current
        following = self.get_next_section(current) if current else None
        return GuidedOnboardingState(
            phase=self.phase,
            is_guided_active=self.is_guided_active,
            dismissed=self._dismissed,
            should_prompt=self.should_prompt,
            current_section=current,
            step_number=self.get_step_number(current),
            total_steps=self.total_steps,
            incomplete_sections=self.incomplete_sections,
            first_incomplete_section=self.first_incomplete_section,
            previous_section=self.get_prev_section(current),
            next_section=following,
            is_last_step=bool(current) and following is None,
        )

    # -------------------------------- helpers --------------------------------

    def _is_complete(self, section_id) -> bool:
        return self._completeness.percent_for(section_id) >= 100

    def _move_to(self, section_id) -> None:
        self._current = section_id
        if section_id is None:
            self._store.delete(self._account_id, SECTION_KEY)
        else:
            self._store.set(self._account_id, SECTION_KEY, section_id)
