import json
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import Client, TestCase
from django.urls import reverse

from accounts.tokens import issue_token
from catalog.models import CPU, GPU, PSU, Motherboard

from .models import Build
from .services import persistence


class BuildApiTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user("ana@example.com", "secret12", name="Ana")
        self.other = User.objects.create_user("ben@example.com", "secret12", name="Ben")
        self.admin = User.objects.create_superuser("root@example.com", "secret12", name="Root")

        self.cpu = CPU.objects.create(
            name="Ryzen 7 7700X", price=Decimal("299.99"), socket="AM5",
            cores=8, threads=16, base_clock=Decimal("3.60"), tdp=105,
        )
        self.mobo = Motherboard.objects.create(
            name="Z790", price=Decimal("250.00"), socket="LGA1700",
            chipset="Z790", form_factor="ATX", ram_slots=4, max_ram=192,
        )
        self.gpu = GPU.objects.create(
            name="RTX 4080", price=Decimal("1199.00"), memory_size=16,
            memory_type="GDDR6X", core_clock=2205, tdp=320,
        )
        self.psu = PSU.objects.create(
            name="CX500", price=Decimal("55.00"), power=500,
            efficiency_rating="80 Plus Bronze",
        )
        self.client = Client()

    def _auth(self, user):
        return {"HTTP_AUTHORIZATION": f"Bearer {issue_token(user)}"}

    def _post(self, name, data, **extra):
        return self.client.post(
            reverse(name), data=json.dumps(data), content_type="application/json", **extra
        )

    def test_evaluate_with_catalog_ids(self):
        resp = self._post(
            "evaluate_build",
            {"components": {"cpu": self.cpu.pk, "motherboard": {"id": self.mobo.pk}}},
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertFalse(data["compatibility"]["compatible"])
        self.assertEqual(
            data["compatibility"]["issues"],
            ["CPU socket AM5 is not compatible with motherboard socket LGA1700"],
        )
        self.assertEqual(data["totalPrice"], 549.99)

    def test_evaluate_with_full_records(self):
        resp = self._post(
            "evaluate_build",
            {"components": {"cpu": {"tdp": 125}, "gpu": {"tdp": 320}, "psu": {"power": 500}}},
        )
        issues = resp.json()["compatibility"]["issues"]
        self.assertEqual(
            issues,
            ["PSU wattage (500W) may be insufficient for this build (recommended: 595W)"],
        )

    def test_evaluate_empty_build(self):
        data = self._post("evaluate_build", {"components": {}}).json()
        self.assertFalse(data["evaluated"])
        self.assertTrue(data["compatibility"]["compatible"])
        self.assertEqual(data["totalPrice"], 0.0)

    def test_evaluate_rejects_unknown_type_and_bad_json(self):
        resp = self._post("evaluate_build", {"components": {"toaster": 1}})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("toaster", resp.json()["errors"])

        resp = self.client.post(
            reverse("evaluate_build"), data="{not json", content_type="application/json"
        )
        self.assertEqual(resp.status_code, 400)

    def test_evaluate_unknown_component_id(self):
        resp = self._post("evaluate_build", {"components": {"cpu": 9999}})
        self.assertEqual(resp.status_code, 404)

    def test_auto_build(self):
        resp = self._post("auto_build", {"purpose": "gaming", "budget": 2500})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertIn("cpu", data["components"])
        self.assertIn("summary", data)

        resp = self._post("auto_build", {"purpose": "gaming", "budget": "lots"})
        self.assertEqual(resp.status_code, 400)

    def test_save_build(self):
        resp = self._post(
            "builds",
            {
                "name": "First build",
                "totalPrice": 549.99,
                "components": {"cpu": {"id": self.cpu.pk}, "motherboard": {"id": self.mobo.pk}},
            },
            **self._auth(self.user),
        )
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["message"], "Build saved successfully")
        build = Build.objects.get(pk=data["buildId"])
        self.assertEqual(build.user, self.user)
        self.assertEqual(build.components.count(), 2)

    def test_save_build_prices_from_catalog_when_total_missing(self):
        resp = self._post(
            "builds",
            {"name": "No total", "components": {"cpu": self.cpu.pk, "psu": self.psu.pk}},
            **self._auth(self.user),
        )
        build = Build.objects.get(pk=resp.json()["buildId"])
        self.assertEqual(build.total_price, Decimal("354.99"))

    def test_save_build_validation(self):
        resp = self._post(
            "builds",
            {"name": "", "components": {"cpu": self.cpu.pk}},
            **self._auth(self.user),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(Build.objects.count(), 0)

    def test_save_build_rejects_oversized_price(self):
        resp = self._post(
            "builds",
            {"name": "Too rich", "totalPrice": 1e12, "components": {"cpu": self.cpu.pk}},
            **self._auth(self.user),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("totalPrice", resp.json()["errors"])
        self.assertEqual(Build.objects.count(), 0)

    def test_save_build_rejects_fractional_ids(self):
        resp = self._post(
            "builds",
            {"name": "Fraction", "totalPrice": 10, "components": {"cpu": self.cpu.pk + 0.9}},
            **self._auth(self.user),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("cpu", resp.json()["errors"])
        self.assertEqual(Build.objects.count(), 0)

    def test_save_build_rejects_same_type_twice(self):
        resp = self._post(
            "builds",
            {
                "name": "Two cpus",
                "totalPrice": 10,
                "components": {"cpu": self.cpu.pk, "cpus": {"id": self.cpu.pk}},
            },
            **self._auth(self.user),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("cpus", resp.json()["errors"])
        self.assertEqual(Build.objects.count(), 0)

        resp = self._post(
            "evaluate_build", {"components": {"gpu": self.gpu.pk, "GPUs": self.gpu.pk}}
        )
        self.assertEqual(resp.status_code, 400)

    def test_list_and_get_builds(self):
        build_id = persistence.create_build(self.user, "Mine", 100, [("cpu", self.cpu.pk)])
        persistence.create_build(self.other, "Theirs", 100, [("cpu", self.cpu.pk)])

        resp = self.client.get(reverse("builds"), **self._auth(self.user))
        self.assertEqual([b["name"] for b in resp.json()], ["Mine"])

        resp = self.client.get(reverse("build_detail", args=[build_id]), **self._auth(self.user))
        self.assertEqual(resp.json()["components"][0]["name"], "Ryzen 7 7700X")

        resp = self.client.get(reverse("build_detail", args=[build_id]), **self._auth(self.other))
        self.assertEqual(resp.status_code, 404)

    def test_delete_build(self):
        build_id = persistence.create_build(self.user, "Mine", 100, [("cpu", self.cpu.pk)])

        resp = self.client.delete(reverse("build_detail", args=[build_id]), **self._auth(self.other))
        self.assertEqual(resp.status_code, 404)

        resp = self.client.delete(reverse("build_detail", args=[build_id]), **self._auth(self.user))
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(Build.objects.exists())

    def test_admin_build_routes(self):
        build_id = persistence.create_build(self.user, "Mine", 100, [("cpu", self.cpu.pk)])

        resp = self.client.get(reverse("admin_builds"), **self._auth(self.user))
        self.assertEqual(resp.status_code, 403)

        resp = self.client.get(reverse("admin_builds"), **self._auth(self.admin))
        self.assertEqual(resp.json()[0]["user_email"], "ana@example.com")

        resp = self.client.delete(
            reverse("admin_build_detail", args=[build_id]), **self._auth(self.admin)
        )
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(Build.objects.exists())
