import json
import os
import tempfile
from decimal import Decimal
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import Client, TestCase
from django.urls import reverse

from accounts.tokens import issue_token
from pcbuilder.errors import NotFound

from .models import CPU, Cooler, Motherboard
from .registry import editable_fields, resolve_category, serialize_component


class RegistryTests(TestCase):
    def test_resolve_category_accepts_route_names(self):
        self.assertEqual(resolve_category("cpus"), "cpu")
        self.assertEqual(resolve_category("Mice"), "mouse")
        self.assertEqual(resolve_category("storage"), "storage")
        with self.assertRaises(NotFound):
            resolve_category("toasters")

    def test_editable_fields_are_model_columns(self):
        fields = editable_fields("cpu")
        self.assertEqual(fields[:3], ["name", "price", "image_url"])
        self.assertIn("socket", fields)
        self.assertNotIn("id", fields)

    def test_serialize_component_uses_plain_numbers(self):
        cpu = CPU.objects.create(
            name="Ryzen 5 7600", price=Decimal("229.00"), socket="AM5",
            cores=6, threads=12, base_clock=Decimal("3.80"), tdp=65,
        )
        data = serialize_component(cpu)
        self.assertEqual(data["id"], cpu.pk)
        self.assertEqual(data["price"], 229.0)
        self.assertIsInstance(data["base_clock"], float)


class CatalogApiTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user("ana@example.com", "secret12", name="Ana")
        self.admin = User.objects.create_superuser("root@example.com", "secret12", name="Root")
        self.cpu = CPU.objects.create(
            name="Ryzen 5 7600", price=Decimal("229.00"), socket="AM5",
            cores=6, threads=12, base_clock=Decimal("3.80"), tdp=65,
        )
        self.amd_board = Motherboard.objects.create(
            name="B650", price=Decimal("189.50"), socket="AM5",
            chipset="B650", form_factor="ATX", ram_slots=4, max_ram=128,
        )
        Motherboard.objects.create(
            name="Z790", price=Decimal("250.00"), socket="LGA1700",
            chipset="Z790", form_factor="ATX", ram_slots=4, max_ram=192,
        )
        Cooler.objects.create(
            name="Hyper 212", price=Decimal("39.99"), type="Air",
            socket="Universal", tdp_supported=150, fan_size=120,
        )
        Cooler.objects.create(
            name="Intel Tower", price=Decimal("49.99"), type="Air",
            socket="LGA1700, LGA1200", tdp_supported=180, fan_size=120,
        )
        self.client = Client()

    def _send(self, method, url, data, user=None):
        extra = {}
        if user is not None:
            extra["HTTP_AUTHORIZATION"] = f"Bearer {issue_token(user)}"
        return getattr(self.client, method)(
            url, data=json.dumps(data), content_type="application/json", **extra
        )

    def test_list_components(self):
        resp = self.client.get(reverse("component_list", args=["motherboards"]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([m["name"] for m in resp.json()], ["B650", "Z790"])

    def test_list_search_price_range_and_sort(self):
        url = reverse("component_list", args=["motherboards"])

        resp = self.client.get(url, {"q": "z79"})
        self.assertEqual([m["name"] for m in resp.json()], ["Z790"])

        resp = self.client.get(url, {"min_price": "200"})
        self.assertEqual([m["name"] for m in resp.json()], ["Z790"])

        resp = self.client.get(url, {"max_price": "189.50"})
        self.assertEqual([m["name"] for m in resp.json()], ["B650"])

        resp = self.client.get(url, {"sort": "price-desc"})
        self.assertEqual([m["name"] for m in resp.json()], ["Z790", "B650"])

        resp = self.client.get(url, {"sort": "name-desc", "min_price": "100"})
        self.assertEqual([m["name"] for m in resp.json()], ["Z790", "B650"])

    def test_list_rejects_bad_filters(self):
        url = reverse("component_list", args=["motherboards"])

        resp = self.client.get(url, {"sort": "rating-desc"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("sort", resp.json()["errors"])

        resp = self.client.get(url, {"min_price": "cheap"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("min_price", resp.json()["errors"])

    def test_unknown_category_is_404(self):
        resp = self.client.get(reverse("component_list", args=["toasters"]))
        self.assertEqual(resp.status_code, 404)

    def test_component_detail(self):
        resp = self.client.get(reverse("component_detail", args=["cpu", self.cpu.pk]))
        self.assertEqual(resp.json()["socket"], "AM5")

        resp = self.client.get(reverse("component_detail", args=["cpu", 9999]))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Component not found")

    def test_compatible_motherboards_and_coolers(self):
        resp = self.client.get(
            reverse("compatible_with", args=["cpu", self.cpu.pk, "motherboards"])
        )
        self.assertEqual([m["name"] for m in resp.json()], ["B650"])

        resp = self.client.get(reverse("compatible_with", args=["cpu", self.cpu.pk, "cooler"]))
        self.assertEqual([c["name"] for c in resp.json()], ["Hyper 212"])

    def test_admin_create_requires_admin(self):
        payload = {"name": "Test CPU", "price": 10}
        url = reverse("admin_component_create", args=["cpu"])
        self.assertEqual(self._send("post", url, payload).status_code, 401)
        self.assertEqual(self._send("post", url, payload, user=self.user).status_code, 403)

    def test_admin_create_update_delete(self):
        url = reverse("admin_component_create", args=["cpus"])
        resp = self._send(
            "post",
            url,
            {
                "name": "Core i5-13600K", "price": 319.99, "socket": "LGA1700",
                "cores": 14, "threads": 20, "base_clock": 3.5, "tdp": 125,
            },
            user=self.admin,
        )
        self.assertEqual(resp.status_code, 201)
        new_id = resp.json()["id"]
        self.assertEqual(CPU.objects.get(pk=new_id).socket, "LGA1700")

        detail = reverse("admin_component_detail", args=["cpu", new_id])
        resp = self._send("patch", detail, {"price": 289.99}, user=self.admin)
        self.assertEqual(resp.status_code, 200)
        cpu = CPU.objects.get(pk=new_id)
        self.assertEqual(cpu.price, Decimal("289.99"))
        self.assertEqual(cpu.cores, 14)

        resp = self.client.delete(
            detail, HTTP_AUTHORIZATION=f"Bearer {issue_token(self.admin)}"
        )
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(CPU.objects.filter(pk=new_id).exists())

    def test_admin_write_rejects_unknown_and_invalid_fields(self):
        url = reverse("admin_component_create", args=["cpu"])
        resp = self._send("post", url, {"name": "X", "price": 1, "id": 5}, user=self.admin)
        self.assertEqual(resp.status_code, 400)
        self.assertIn("id", resp.json()["errors"])

        resp = self._send("post", url, {"name": "X", "price": "cheap"}, user=self.admin)
        self.assertEqual(resp.status_code, 400)
        self.assertIn("price", resp.json()["errors"])
        self.assertEqual(CPU.objects.count(), 1)

    def test_admin_update_missing_component(self):
        detail = reverse("admin_component_detail", args=["cpu", 9999])
        resp = self._send("put", detail, {"price": 1}, user=self.admin)
        self.assertEqual(resp.status_code, 404)


class ImportComponentsCommandTests(TestCase):
    def setUp(self):
        fd, self.csv_path = tempfile.mkstemp(suffix=".csv")
        with os.fdopen(fd, "w") as fh:
            fh.write(
                "Name,Price USD,Socket,Core Count,Thread Count,Base Clock GHz,TDP,Vendor SKU\n"
                "Ryzen 5 7600,$229.00,AM5,6,12,3.8,65,100-100001015BOX\n"
                "Core i5-13600K,,LGA1700,14,20,3.5,125,BX8071513600K\n"
            )

    def tearDown(self):
        os.remove(self.csv_path)

    def test_import_creates_then_updates(self):
        out = StringIO()
        call_command(
            "import_components", "--category", "cpus", "--csv", self.csv_path,
            "--require-price", verbosity=0, stdout=out,
        )
        self.assertEqual(CPU.objects.count(), 1)
        cpu = CPU.objects.get(name="Ryzen 5 7600")
        self.assertEqual(cpu.price, Decimal("229.00"))
        self.assertEqual(cpu.cores, 6)
        self.assertIn("1 created", out.getvalue())
        self.assertIn("1 skipped", out.getvalue())

        out = StringIO()
        call_command(
            "import_components", "--category", "cpu", "--csv", self.csv_path,
            "--require-price", verbosity=0, stdout=out,
        )
        self.assertEqual(CPU.objects.count(), 1)
        self.assertIn("1 updated", out.getvalue())

    def test_dry_run_writes_nothing(self):
        out = StringIO()
        call_command(
            "import_components", "--category", "cpu", "--csv", self.csv_path,
            "--dry-run", verbosity=0, stdout=out,
        )
        self.assertEqual(CPU.objects.count(), 0)
        self.assertIn("[DRY-RUN]", out.getvalue())

    def test_unknown_category(self):
        with self.assertRaises(CommandError):
            call_command("import_components", "--category", "toaster", "--csv", self.csv_path)
