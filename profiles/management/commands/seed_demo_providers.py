from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from rest_framework.authtoken.models import Token

from profiles.completeness import completeness_for
from profiles.models import Profile

DEMO_ACCOUNTS = {
    "family": {
        "username": "margaret",
        "password": "asdasd",
        "email": "margaret@example.com",
        "profile": {"display_name": "Margaret Lee", "city": "Austin", "state": "TX"},
    },
    "provider": {
        "username": "sunrise",
        "password": "asdasd24",
        "email": "sunrise@example.com",
        "profile": {
            "display_name": "Sunrise Homecare",
            "category": "home_care_agency",
            "phone": "555-0100",
            "care_types": ["Home Care"],
        },
    },
}


class Command(BaseCommand):
    help = "Create or update demo family/provider accounts for the dashboard."

    def handle(self, *args, **options):
        User = get_user_model()

        for role, cfg in DEMO_ACCOUNTS.items():
            u, created = User.objects.get_or_create(
                username=cfg["username"],
                defaults={"email": cfg["email"]},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created user '{u.username}'"))
            else:
                self.stdout.write(f"User '{u.username}' already exists")

            # set (or reset) password to match the frontend
            u.set_password(cfg["password"])
            u.save(update_fields=["password"])

            # ensure profile with correct type and demo fields
            prof, _ = Profile.objects.get_or_create(user=u, defaults={"type": role})
            prof.type = role
            for attr, val in cfg["profile"].items():
                setattr(prof, attr, val)
            prof.save()

            token, _ = Token.objects.get_or_create(user=u)
            self.stdout.write(
                f"  → type={role}, completeness={completeness_for(prof).overall}%, token={token.key}"
            )

        self.stdout.write(self.style.SUCCESS("Demo accounts ready."))
