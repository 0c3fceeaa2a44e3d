"""Onboarding app models.

Defines AccountFlag, a small per-account key/value row used to remember
dashboard UI state across reloads (e.g. a dismissed onboarding prompt).
"""

from django.conf import settings
from django.db import models


class AccountFlag(models.Model):
    """One stored value per (user, key)."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="flags",
    )
    key = models.CharField(max_length=100)
    value = models.JSONField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "key"], name="unique_flag_per_user_and_key")
        ]
        ordering = ("user", "key")

    def __str__(self) -> str:
        return f"AccountFlag<{self.user_id}:{self.key}={self.value!r}>"
