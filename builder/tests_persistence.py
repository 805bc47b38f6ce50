from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase

from catalog.models import CPU, PSU, Motherboard
from pcbuilder.errors import NotFound, PersistenceFailure, ValidationFailure

from .models import Build, BuildComponent
from .services import persistence


class PersistenceTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user("ana@example.com", "secret12", name="Ana")
        self.other = User.objects.create_user("ben@example.com", "secret12", name="Ben")
        self.admin = User.objects.create_superuser("root@example.com", "secret12", name="Root")

        self.cpu = CPU.objects.create(
            name="Ryzen 7 7700X", price=Decimal("299.99"), socket="AM5",
            cores=8, threads=16, base_clock=Decimal("4.50"), tdp=105,
        )
        self.mobo = Motherboard.objects.create(
            name="B650 Tomahawk", price=Decimal("189.50"), socket="AM5",
            chipset="B650", form_factor="ATX", ram_slots=4, max_ram=128,
        )
        self.psu = PSU.objects.create(
            name="RM750", price=Decimal("109.00"), power=750,
            efficiency_rating="80 Plus Gold",
        )
        self.refs = [("cpu", self.cpu.pk), ("motherboard", self.mobo.pk), ("psu", self.psu.pk)]

    def test_create_build_writes_header_and_rows(self):
        build_id = persistence.create_build(self.user, "Gaming rig", "598.49", self.refs)

        build = Build.objects.get(pk=build_id)
        self.assertEqual(build.user, self.user)
        self.assertEqual(build.total_price, Decimal("598.49"))
        rows = list(build.components.values_list("component_type", "component_id"))
        self.assertEqual(rows, self.refs)

    def test_failed_row_rolls_back_everything(self):
        """A database error on any component row leaves no trace of the build."""
        calls = {"n": 0}
        real_create = BuildComponent.objects.create

        def flaky_create(**kwargs):
            calls["n"] += 1
            if calls["n"] == 2:
                raise DatabaseError("disk full")
            return real_create(**kwargs)

        with mock.patch.object(BuildComponent.objects, "create", side_effect=flaky_create):
            with self.assertLogs("builder.services.persistence", level="ERROR"):
                with self.assertRaises(PersistenceFailure):
                    persistence.create_build(self.user, "Doomed", 598.49, self.refs)

        self.assertEqual(Build.objects.count(), 0)
        self.assertEqual(BuildComponent.objects.count(), 0)

    def test_validation_errors_write_nothing(self):
        with self.assertRaises(ValidationFailure):
            persistence.create_build(self.user, "  ", 10, self.refs)
        with self.assertRaises(ValidationFailure):
            persistence.create_build(self.user, "Bad price", "lots", self.refs)
        with self.assertRaises(ValidationFailure):
            persistence.create_build(self.user, "Negative", -1, self.refs)
        with self.assertRaises(ValidationFailure):
            persistence.create_build(self.user, "Bad type", 10, [("toaster", 1)])
        with self.assertRaises(NotFound):
            persistence.create_build(self.user, "Ghost", 10, [("gpu", 999)])
        self.assertEqual(Build.objects.count(), 0)

    def test_price_must_fit_the_column(self):
        with self.assertRaises(ValidationFailure) as ctx:
            persistence.create_build(self.user, "Too rich", 10 ** 8, self.refs)
        self.assertIn("totalPrice", ctx.exception.fields)
        build_id = persistence.create_build(self.user, "Just fits", "99999999.99", self.refs)
        self.assertEqual(Build.objects.get(pk=build_id).total_price, Decimal("99999999.99"))

    def test_component_ids_must_be_whole_and_types_unique(self):
        with self.assertRaises(ValidationFailure):
            persistence.create_build(self.user, "Fraction", 10, [("cpu", 1.5)])
        with self.assertRaises(ValidationFailure):
            persistence.create_build(
                self.user, "Two cpus", 10, [("cpu", self.cpu.pk), ("cpu", self.cpu.pk)]
            )
        build_id = persistence.create_build(self.user, "Whole float", 10, [("cpu", float(self.cpu.pk))])
        self.assertEqual(Build.objects.get(pk=build_id).components.get().component_id, self.cpu.pk)

    def test_list_builds_only_returns_own_builds(self):
        persistence.create_build(self.user, "Mine", 100, self.refs)
        persistence.create_build(self.other, "Theirs", 100, self.refs[:1])

        mine = persistence.list_builds(self.user)
        self.assertEqual([b["name"] for b in mine], ["Mine"])
        self.assertEqual(
            [c["type"] for c in mine[0]["components"]], ["cpu", "motherboard", "psu"]
        )
        self.assertEqual(mine[0]["components"][0]["name"], "Ryzen 7 7700X")
        self.assertEqual(mine[0]["missing_components"], 0)

    def test_deleted_catalog_component_is_omitted(self):
        build_id = persistence.create_build(self.user, "Aging rig", 598.49, self.refs)
        self.psu.delete()

        data = persistence.get_build(build_id, user=self.user)
        self.assertEqual([c["type"] for c in data["components"]], ["cpu", "motherboard"])
        self.assertEqual(data["missing_components"], 1)
        # the saved price is reported as stored
        self.assertEqual(data["total_price"], 598.49)

    def test_list_all_builds_includes_owner(self):
        persistence.create_build(self.user, "Mine", 100, self.refs)
        data = persistence.list_all_builds()
        self.assertEqual(data[0]["user_email"], "ana@example.com")
        self.assertEqual(data[0]["user_name"], "Ana")

    def test_get_build_hides_other_users_builds(self):
        build_id = persistence.create_build(self.user, "Mine", 100, self.refs)
        with self.assertRaises(NotFound):
            persistence.get_build(build_id, user=self.other)
        self.assertEqual(persistence.get_build(build_id, user=self.admin)["id"], build_id)

    def test_delete_build_by_owner_or_admin(self):
        first = persistence.create_build(self.user, "One", 100, self.refs)
        second = persistence.create_build(self.user, "Two", 100, self.refs)

        with self.assertRaises(NotFound):
            persistence.delete_build(first, self.other)
        self.assertTrue(Build.objects.filter(pk=first).exists())

        persistence.delete_build(first, self.user)
        persistence.delete_build(second, self.admin)
        self.assertEqual(Build.objects.count(), 0)
        self.assertEqual(BuildComponent.objects.count(), 0)

    def test_deleting_user_removes_builds(self):
        persistence.create_build(self.user, "Mine", 100, self.refs)
        self.user.delete()
        self.assertEqual(Build.objects.count(), 0)
