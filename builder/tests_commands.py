from decimal import Decimal
from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from .models import Build


class ClearUserBuildsTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.ana = User.objects.create_user("ana@example.com", "secret12", name="Ana")
        self.ben = User.objects.create_user("ben@example.com", "secret12", name="Ben")
        Build.objects.create(user=self.ana, name="A1", total_price=Decimal("10.00"))
        Build.objects.create(user=self.ana, name="A2", total_price=Decimal("20.00"))
        Build.objects.create(user=self.ben, name="B1", total_price=Decimal("30.00"))

    def test_requires_a_target(self):
        with self.assertRaises(CommandError):
            call_command("clear_user_builds")

    def test_unknown_user(self):
        with self.assertRaises(CommandError):
            call_command("clear_user_builds", "--user", "nobody@example.com", "--yes")

    def test_clear_one_user(self):
        out = StringIO()
        call_command("clear_user_builds", "--user", "ANA@example.com", "--yes", stdout=out)
        self.assertIn("Deleted 2 build(s).", out.getvalue())
        self.assertEqual(list(Build.objects.values_list("name", flat=True)), ["B1"])

    def test_clear_all_needs_confirmation(self):
        out = StringIO()
        with mock.patch("builtins.input", return_value="no"):
            call_command("clear_user_builds", "--all", stdout=out)
        self.assertIn("Aborted.", out.getvalue())
        self.assertEqual(Build.objects.count(), 3)

        with mock.patch("builtins.input", return_value="YES"):
            call_command("clear_user_builds", "--all", stdout=out)
        self.assertEqual(Build.objects.count(), 0)
