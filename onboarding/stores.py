"""Account-scoped flag stores.

The guided onboarding controller keeps a few values per account (dismissal,
current stepper section). It talks to a FlagStore so the backing storage can
be swapped: the database in production, a dict in tests.
"""

from abc import ABC, abstractmethod

from .models import AccountFlag


class FlagStore(ABC):
    """Key/value storage scoped by account id. Last write wins."""

    @abstractmethod
    def get(self, account_id, key: str, default=None):
        """Return the stored value or `default`."""

    @abstractmethod
    def set(self, account_id, key: str, value) -> None:
        """Store `value` under `key` for the account."""

    @abstractmethod
    def delete(self, account_id, key: str) -> None:
        """Remove the key for the account (no-op when absent)."""


class InMemoryFlagStore(FlagStore):
    def __init__(self):
        self._data = {}

    def get(self, account_id, key, default=None):
        return self._data.get((account_id, key), default)

    def set(self, account_id, key, value):
        self._data[(account_id, key)] = value

    def delete(self, account_id, key):
        self._data.pop((account_id, key), None)


class DatabaseFlagStore(FlagStore):
    """Flags stored as AccountFlag rows; `account_id` is the user id."""

    def get(self, account_id, key, default=None):
        row = AccountFlag.objects.filter(user_id=account_id, key=key).only("value").first()
        return row.value if row is not None else default

    def set(self, account_id, key, value):
        AccountFlag.objects.update_or_create(
            user_id=account_id, key=key, defaults={"value": value}
        )

    def delete(self, account_id, key):
        AccountFlag.objects.filter(user_id=account_id, key=key).delete()
