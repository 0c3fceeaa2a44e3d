"""Glue between stored profiles and the guided onboarding controller."""

import logging

from profiles.completeness import completeness_for
from profiles.models import Profile

from .controller import GuidedOnboardingController
from .stores import DatabaseFlagStore, FlagStore

logger = logging.getLogger(__name__)


def guided_controller_for(profile: Profile, store: FlagStore | None = None) -> GuidedOnboardingController:
    """Controller for the profile owner, scored from the profile as stored now."""
    return GuidedOnboardingController(
        completeness_for(profile),
        store=store if store is not None else DatabaseFlagStore(),
        account_id=profile.user_id,
    )


def record_section_save(profile: Profile, section_id: str, store: FlagStore | None = None) -> GuidedOnboardingController:
    """
    Run after a section save has succeeded.

    `profile` must be the saved instance, so building the controller from it
    recomputes completeness. If the stepper is open on the saved section it
    moves to the next incomplete one, or closes when none is left. Saves of
    other sections leave the stepper where it is.
    """
    controller = guided_controller_for(profile, store)
    if controller.is_guided_active and controller.current_section == section_id:
        controller.advance(section_id)
        logger.info(
            "Account %s saved %s during guided onboarding, now at %s",
            profile.user_id,
            section_id,
            controller.current_section,
        )
    return controller
