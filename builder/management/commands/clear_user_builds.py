import logging

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from builder.models import Build, BuildComponent

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Delete saved builds, either every build or those owned by one account"

    def add_arguments(self, parser):
        target = parser.add_mutually_exclusive_group()
        target.add_argument("--all", action="store_true", help="Delete every saved build")
        target.add_argument("--user", metavar="EMAIL", help="Delete builds owned by EMAIL")
        parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    def _builds_for(self, options):
        if options["all"]:
            return Build.objects.all(), "all users"
        if not options["user"]:
            raise CommandError("Provide --all or --user <email>")
        User = get_user_model()
        owner = User.objects.filter(email__iexact=options["user"]).first()
        if owner is None:
            raise CommandError(f"No account with email {options['user']}")
        return Build.objects.filter(user=owner), owner.email

    def handle(self, *args, **options):
        builds, scope = self._builds_for(options)
        count = builds.count()
        if not count:
            self.stdout.write(f"No builds to delete for {scope}.")
            return

        rows = BuildComponent.objects.filter(build__in=builds).count()
        if not options["yes"]:
            answer = input(
                f"Delete {count} build(s) ({rows} component rows) for {scope}? Type YES to confirm: "
            )
            if answer != "YES":
                self.stdout.write("Aborted.")
                return

        builds.delete()
        logger.info("Deleted %d build(s) for %s", count, scope)
        self.stdout.write(self.style.SUCCESS(f"Deleted {count} build(s)."))
