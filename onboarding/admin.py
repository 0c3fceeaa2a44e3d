from django.contrib import admin
from .models import AccountFlag


@admin.register(AccountFlag)
class AccountFlagAdmin(admin.ModelAdmin):
    """
    Gespeicherte Dashboard-Flags pro User (z. B. weggeklickter Onboarding-Hinweis).
    """
    list_display = ("id", "user", "key", "value", "updated_at")
    list_select_related = ("user",)
    search_fields = ("user__username", "user__email", "key")
    list_filter = ("key",)
    ordering = ("user", "key")
    readonly_fields = ("updated_at",)
