from django.urls import path
from .views import (
    ProfileCompletenessView,
    ProfileSectionView,
    ProfileView,
    ProviderProfileListView,
)

urlpatterns = [
    path("profile/<int:pk>/", ProfileView.as_view(), name="profile"),
    path("profile/<int:pk>/completeness/", ProfileCompletenessView.as_view(), name="profile-completeness"),
    path("profile/sections/<str:section_id>/", ProfileSectionView.as_view(), name="profile-section"),
    path("profiles/providers/", ProviderProfileListView.as_view(), name="provider-profiles"),
]
