"""Seed one owner record per role, sample content, and dev identity tokens."""

from django.core.management.base import BaseCommand

from access_control.catalog import ContentStatus, Role
from authentication.models import User
from authentication.services import TokenService
from content.models import Article, News

DEMO_USERS = {
    Role.ADMIN: "admin@example.com",
    Role.CONTENT_MANAGER: "manager@example.com",
    Role.CONTENT_SPECIALIST: "specialist@example.com",
    Role.VIEWER: "viewer@example.com",
}


def create_demo_users() -> dict[Role, User]:
    """Create (or revive) one live user per role and return a role->User map."""
    users = {}
    for role, email in DEMO_USERS.items():
        user = User.objects.alive().with_email(email).first()
        if user is None:
            user = User.objects.create(email=email, role=role, name=role.label, subject_id=f"demo-{role.value}")
        users[role] = user
    return users


def create_demo_content(users: dict[Role, User]) -> None:
    """Create a published and a draft item for the manager and the specialist."""
    manager = users[Role.CONTENT_MANAGER]
    specialist = users[Role.CONTENT_SPECIALIST]

    Article.objects.get_or_create(
        title="Manager Article",
        owner=manager,
        defaults={"body": "Published by a content manager.", "status": ContentStatus.PUBLISHED},
    )
    Article.objects.get_or_create(
        title="Specialist Draft",
        owner=specialist,
        defaults={"body": "Awaiting review.", "status": ContentStatus.DRAFT},
    )
    News.objects.get_or_create(
        title="Manager News",
        owner=manager,
        defaults={"body": "Breaking.", "status": ContentStatus.PUBLISHED},
    )
    News.objects.get_or_create(
        title="Specialist News Draft",
        owner=specialist,
        defaults={"body": "Pending.", "status": ContentStatus.DRAFT},
    )


def reset_demo_data() -> None:
    """Remove demo content and hard-delete the demo users."""
    emails = list(DEMO_USERS.values())
    Article.objects.filter(owner__email__in=emails).delete()
    News.objects.filter(owner__email__in=emails).delete()
    User.objects.filter(email__in=emails).delete()


class Command(BaseCommand):
    """Management command to seed demo owners, content and tokens."""

    help = (
        "Seed one user per role plus sample articles and news, and print identity "
        "tokens for local use. Use --reset to clear previously seeded data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete demo users and their content before seeding.",
        )
        parser.add_argument(
            "--no-tokens",
            action="store_true",
            help="Do not print identity tokens.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self.stdout.write("Resetting demo data...")
            reset_demo_data()
            self.stdout.write(self.style.WARNING("Demo data cleared."))

        self.stdout.write("Seeding demo data...")
        users = create_demo_users()
        create_demo_content(users)

        if not options.get("no_tokens"):
            for role, user in users.items():
                token = TokenService.issue_token(user.subject_id or str(user.pk), user.email, role.value)
                self.stdout.write(f"{role.value}: {token}")

        self.stdout.write(self.style.SUCCESS("Demo seed completed."))
