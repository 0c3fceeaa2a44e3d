from django.contrib import admin

from .completeness import completeness_for
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Profile-Liste mit eigener ID, zugehöriger User-ID und Vollständigkeit.
    """
    list_display = (
        "id",
        "user_id_display",
        "user",
        "display_name",
        "type",
        "category",
        "completeness_display",
        "updated_at",
    )
    list_select_related = ("user",)
    search_fields = ("user__username", "user__email", "display_name", "city", "type")
    list_filter = ("type", "category", "created_at")
    ordering = ("-updated_at", "-id")
    readonly_fields = ("created_at", "updated_at", "completeness_display")

    def user_id_display(self, obj):
        return obj.user_id
    user_id_display.short_description = "user id"
    user_id_display.admin_order_field = "user__id"

    def completeness_display(self, obj):
        return f"{completeness_for(obj).overall}%"
    completeness_display.short_description = "completeness"
