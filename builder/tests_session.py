from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from catalog.models import CPU, Motherboard
from pcbuilder.errors import AuthRequired, NotFound, PersistenceFailure, ValidationFailure

from .models import Build
from .session import BuildSession, OrmBuildBackend


class FailingBackend:
    def __init__(self):
        self.calls = []

    def create_build(self, user, name, total_price, components, description=""):
        self.calls.append((user, name, total_price, components))
        raise PersistenceFailure("Build could not be saved")


class BuildSessionTests(TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user("ana@example.com", "secret12", name="Ana")
        self.cpu = CPU.objects.create(
            name="Ryzen 7 7700X", price=Decimal("299.99"), socket="AM5",
            cores=8, threads=16, base_clock=Decimal("3.60"), tdp=105,
        )
        self.intel_board = Motherboard.objects.create(
            name="Z790", price=Decimal("250.00"), socket="LGA1700",
            chipset="Z790", form_factor="ATX", ram_slots=4, max_ram=192,
        )
        self.amd_board = Motherboard.objects.create(
            name="B650", price=Decimal("189.50"), socket="AM5",
            chipset="B650", form_factor="ATX", ram_slots=4, max_ram=128,
        )

    def test_new_session_is_empty(self):
        session = BuildSession(OrmBuildBackend(), user=self.user)
        self.assertEqual(session.components, {})
        self.assertEqual(session.total_price, Decimal("0.00"))
        self.assertTrue(session.compatibility.compatible)
        self.assertFalse(session.summary.evaluated)

    def test_summary_follows_every_change(self):
        session = BuildSession(OrmBuildBackend(), user=self.user)

        session.select("cpu", self.cpu)
        self.assertEqual(session.total_price, Decimal("299.99"))
        self.assertEqual(session.performance.gaming, 12)

        session.select("motherboard", self.intel_board)
        self.assertFalse(session.compatibility.compatible)
        self.assertEqual(
            session.compatibility.issues,
            ("CPU socket AM5 is not compatible with motherboard socket LGA1700",),
        )

        # replacing a part swaps it out
        session.select("motherboards", self.amd_board)
        self.assertTrue(session.compatibility.compatible)
        self.assertEqual(session.total_price, Decimal("489.49"))
        self.assertIs(session.components["motherboard"], self.amd_board)

        session.remove("motherboard")
        self.assertEqual(list(session.components), ["cpu"])
        self.assertEqual(session.total_price, Decimal("299.99"))

        session.clear()
        self.assertEqual(session.components, {})
        self.assertEqual(session.performance.gaming, 0)

    def test_select_rejects_unknown_category_without_changes(self):
        session = BuildSession(OrmBuildBackend(), user=self.user)
        session.select("cpu", self.cpu)
        before = session.summary
        with self.assertRaises(NotFound):
            session.select("toaster", self.cpu)
        with self.assertRaises(ValidationFailure):
            session.select("gpu", None)
        self.assertEqual(session.summary, before)
        self.assertEqual(list(session.components), ["cpu"])

    def test_save_requires_user(self):
        session = BuildSession(OrmBuildBackend())
        session.select("cpu", self.cpu)
        with self.assertRaises(AuthRequired):
            session.save("Anonymous build")
        self.assertEqual(Build.objects.count(), 0)

    def test_save_requires_name_and_parts(self):
        session = BuildSession(OrmBuildBackend(), user=self.user)
        with self.assertRaises(ValidationFailure):
            session.save("Empty")
        session.select("cpu", self.cpu)
        with self.assertRaises(ValidationFailure):
            session.save("   ")
        self.assertEqual(Build.objects.count(), 0)

    def test_save_persists_selection(self):
        session = BuildSession(OrmBuildBackend(), user=self.user)
        session.select("cpu", self.cpu)
        session.select("motherboard", self.amd_board)

        build_id = session.save(" AM5 starter ", description="first try")

        build = Build.objects.get(pk=build_id)
        self.assertEqual(build.name, "AM5 starter")
        self.assertEqual(build.total_price, Decimal("489.49"))
        self.assertEqual(
            list(build.components.values_list("component_type", "component_id")),
            [("cpu", self.cpu.pk), ("motherboard", self.amd_board.pk)],
        )
        # the session keeps its parts after saving
        self.assertEqual(list(session.components), ["cpu", "motherboard"])

    def test_failed_save_keeps_session_state(self):
        backend = FailingBackend()
        session = BuildSession(backend, user=self.user)
        session.select("cpu", self.cpu)
        before = (session.components, session.summary)

        with self.assertRaises(PersistenceFailure):
            session.save("Doomed")

        self.assertEqual(len(backend.calls), 1)
        self.assertEqual(backend.calls[0][3], [("cpu", self.cpu.pk)])
        self.assertEqual((session.components, session.summary), before)

    def test_dict_parts_need_an_id_to_save(self):
        session = BuildSession(OrmBuildBackend(), user=self.user)
        session.select("cpu", {"socket": "AM5", "price": 100})
        with self.assertRaises(ValidationFailure):
            session.save("No ids")
