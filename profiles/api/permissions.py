"""Profiles API permissions.

Contains custom permission classes used by profile endpoints.
"""

from rest_framework.permissions import BasePermission, SAFE_METHODS

from ..models import Profile


class IsProfileOwner(BasePermission):
    """
    Object-level permission that allows write access only to the profile owner.

    - SAFE methods (GET/HEAD/OPTIONS) are always allowed.
    - For write methods (e.g., PATCH), the user must be authenticated and
      match the profile's owner (`obj.user_id == request.user.id`).
    """

    message = "You may only modify your own profile."

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        return request.user.is_authenticated and obj.user_id == request.user.id


class IsProviderUser(BasePermission):
    """Allow access only to authenticated users with a provider profile."""

    message = "Authenticated user is not a 'provider' profile."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        try:
            profile = Profile.objects.get(user=user)
        except Profile.DoesNotExist:
            self.message = "Authenticated user has no profile."
            return False
        return profile.is_provider
