"""Profiles API views.

Provides endpoints to retrieve a single profile (by user id) and to update the
owner's own profile, a provider listing, the completeness summary of a profile
and the per-section save used by the dashboard edit modals (and the guided
onboarding stepper). Authentication is required for all endpoints; write
access is limited to the profile owner.
"""

import logging

from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from onboarding.api.serializers import OnboardingStateSerializer
from onboarding.services import record_section_save

from ..completeness import completeness_for
from ..models import Profile
from ..sections import save_section
from .permissions import IsProfileOwner, IsProviderUser
from .serializers import (
    SECTION_SERIALIZERS,
    ProfileCompletenessSerializer,
    ProfileDetailSerializer,
    ProfilePatchSerializer,
    ProviderProfileListSerializer,
)

logger = logging.getLogger(__name__)


class ProfileView(generics.RetrieveUpdateAPIView):
    """
    API endpoint for retrieving or partially updating a single profile.

    - GET `/api/profile/{pk}/` returns the profile for the given user id (`pk`).
    - PATCH `/api/profile/{pk}/` updates only the fields provided and is restricted
      to the owner of the profile (the authenticated user with id `pk`).

    Notes:
    - On PATCH, if the profile does not exist for the owner yet, a new profile is
      lazily created for that user.
    - The owner is inferred from the authenticated request and never taken from
      the payload.
    """

    queryset = Profile.objects.select_related("user")
    serializer_class = ProfileDetailSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_permissions(self):
        """Require ownership for PATCH; otherwise authentication only."""
        if self.request.method == "PATCH":
            return [IsAuthenticated(), IsProfileOwner()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        """Use the patch serializer for PATCH; the detail serializer otherwise."""
        if self.request.method == "PATCH":
            return ProfilePatchSerializer
        return ProfileDetailSerializer

    def get_object(self):
        """
        Return the profile by user id.

        - For PATCH: ensure the authenticated user matches the path `pk`.
          If the profile does not exist for the owner, lazily create it before
          applying object-level permission checks.
        - For GET: fetch the profile by user id or return 404 if it does not exist.
        """
        user_id = int(self.kwargs["pk"])

        if self.request.method == "PATCH":
            if self.request.user.id != user_id:
                raise PermissionDenied(
                    "You are only allowed to update your own profile."
                )
            try:
                obj = self.queryset.get(user_id=user_id)
            except Profile.DoesNotExist:
                obj = Profile.objects.create(user=self.request.user)
            self.check_object_permissions(self.request, obj)
            return obj

        return get_object_or_404(self.queryset, user_id=user_id)


class ProviderProfileListView(generics.ListAPIView):
    """
    API endpoint for listing all provider profiles.

    - GET `/api/profiles/providers/` returns profiles with `type="provider"`.
    - Optional `?category=` narrows the list to one provider category.
    - Authentication is required.
    """

    serializer_class = ProviderProfileListSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        """Return provider profiles only (prefetching user for efficiency)."""
        qs = Profile.objects.select_related("user").filter(type="provider")
        category = self.request.query_params.get("category")
        if category:
            allowed = {c[0] for c in Profile.Category.choices}
            if category not in allowed:
                raise ValidationError({"category": "Unknown provider category."})
            qs = qs.filter(category=category)
        return qs


class ProfileCompletenessView(APIView):
    """
    GET `/api/profile/{pk}/completeness/` -> overall score, status text and the
    per-section scores of the profile owned by user `pk`, in canonical order.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        profile = get_object_or_404(Profile, user_id=pk)
        data = ProfileCompletenessSerializer(completeness_for(profile)).data
        return Response(data, status=status.HTTP_200_OK)


class ProfileSectionView(APIView):
    """
    PATCH `/api/profile/sections/{section_id}/` -> save one dashboard section of
    the caller's own provider profile.

    - The payload is validated by the section's serializer; metadata keys are
      merged into the stored metadata, never replacing it.
    - After a successful save completeness is recomputed and an open guided
      onboarding stepper on this section moves on.
    - Invalid payloads (400) and failed writes (503) leave the stepper as it is.
    """

    permission_classes = [IsAuthenticated, IsProviderUser]

    def patch(self, request, section_id):
        serializer_class = SECTION_SERIALIZERS.get(section_id)
        if serializer_class is None:
            raise NotFound(f"Unknown profile section '{section_id}'.")

        profile = Profile.objects.get(user=request.user)
        serializer = serializer_class(
            data=request.data, context={"request": request, "profile": profile}
        )
        serializer.is_valid(raise_exception=True)
        fields, metadata = serializer.split()

        try:
            profile = save_section(profile, fields=fields, metadata=metadata)
        except DatabaseError:
            logger.exception("Saving section %s of profile %s failed", section_id, profile.pk)
            return Response(
                {"detail": "Profile could not be saved. Please try again."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        controller = record_section_save(profile, section_id)
        data = {
            "profile": ProfileDetailSerializer(profile).data,
            "completeness": ProfileCompletenessSerializer(controller.completeness).data,
            "onboarding": OnboardingStateSerializer(controller.snapshot()).data,
        }
        return Response(data, status=status.HTTP_200_OK)
