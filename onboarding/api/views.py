"""Onboarding API views.

Expose the guided onboarding state of the caller's provider profile and the
actions of the dashboard banner / stepper. Every response is the fresh state
snapshot so the client never has to guess the outcome of an action.
"""

from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from profiles.api.permissions import IsProviderUser
from profiles.models import Profile

from ..services import guided_controller_for
from .serializers import OnboardingStateSerializer


# ----------------------------- helpers (module-level) -----------------------------

COMMANDS = {
    "start": lambda controller: controller.start_guided(),
    "stop": lambda controller: controller.stop_guided(),
    "skip": lambda controller: controller.skip(),
    "back": lambda controller: controller.go_back(),
    "dismiss": lambda controller: controller.dismiss(),
    "reset": lambda controller: controller.reset(),
}


def _controller_for_request(request):
    profile = Profile.objects.get(user=request.user)
    return guided_controller_for(profile)


class OnboardingStateView(APIView):
    """GET /api/onboarding/ -> current onboarding state of the caller."""

    permission_classes = [IsAuthenticated, IsProviderUser]

    def get(self, request):
        controller = _controller_for_request(request)
        data = OnboardingStateSerializer(controller.snapshot()).data
        return Response(data, status=status.HTTP_200_OK)


class OnboardingCommandView(APIView):
    """
    POST /api/onboarding/{command}/ with command one of:

    - `start`: open the stepper at the first incomplete section (no-op if open).
    - `stop`: close the stepper.
    - `skip`: leave the current section unsaved and go to the next incomplete one.
    - `back`: go to the previous section in canonical order.
    - `dismiss`: hide the prompt for this account for good.
    - `reset`: make the prompt eligible again after a dismissal.
    """

    permission_classes = [IsAuthenticated, IsProviderUser]

    def post(self, request, command):
        handler = COMMANDS.get(command)
        if handler is None:
            raise NotFound(f"Unknown onboarding command '{command}'.")
        state = handler(_controller_for_request(request))
        return Response(OnboardingStateSerializer(state).data, status=status.HTTP_200_OK)
