from django.urls import path
from .views import OnboardingCommandView, OnboardingStateView

urlpatterns = [
    path("onboarding/", OnboardingStateView.as_view(), name="onboarding-state"),
    path("onboarding/<str:command>/", OnboardingCommandView.as_view(), name="onboarding-command"),
]
