from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("profiles.api.urls")),
    path("api/", include("onboarding.api.urls")),
]
