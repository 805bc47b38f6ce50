from decimal import Decimal

from django.test import SimpleTestCase

from catalog.models import CPU, PSU, Motherboard
from pcbuilder.errors import ValidationFailure

from .services import build_calculator
from .services.build_calculator import (
    PartSelection,
    check_compatibility,
    compatible_components,
    evaluate_build,
    number,
    performance_scores,
    resolve_budget,
    suggest_build,
    total_price,
)


def selection(**parts):
    return PartSelection.from_mapping(parts)


class TestCompatibility(SimpleTestCase):
    def test_matching_sockets_and_enough_power_is_compatible(self):
        result = check_compatibility(
            selection(
                cpu={"socket": "AM5", "tdp": 105, "cores": 8, "base_clock": 3.6},
                motherboard={"socket": "AM5"},
                psu={"power": 650},
            )
        )
        self.assertTrue(result.compatible)
        self.assertEqual(result.issues, ())

    def test_socket_mismatch_reports_both_sockets(self):
        result = check_compatibility(
            selection(
                cpu={"socket": "AM5", "tdp": 105, "cores": 8, "base_clock": 3.6},
                motherboard={"socket": "LGA1700"},
                psu={"power": 650},
            )
        )
        self.assertFalse(result.compatible)
        self.assertEqual(
            result.issues,
            ("CPU socket AM5 is not compatible with motherboard socket LGA1700",),
        )

    def test_socket_comparison_is_case_sensitive(self):
        result = check_compatibility(
            selection(cpu={"socket": "am5"}, motherboard={"socket": "AM5"})
        )
        self.assertFalse(result.compatible)

    def test_socket_rule_needs_both_parts(self):
        self.assertTrue(check_compatibility(selection(cpu={"socket": "AM5"})).compatible)
        self.assertTrue(
            check_compatibility(selection(motherboard={"socket": "LGA1700"})).compatible
        )

    def test_underpowered_psu(self):
        result = check_compatibility(
            selection(cpu={"tdp": 125}, gpu={"tdp": 320}, psu={"power": 500})
        )
        self.assertFalse(result.compatible)
        self.assertEqual(len(result.issues), 1)
        issue = result.issues[0]
        self.assertIn("500", issue)
        self.assertIn("595", issue)
        self.assertEqual(
            issue,
            "PSU wattage (500W) may be insufficient for this build (recommended: 595W)",
        )

    def test_wattage_threshold_is_inclusive(self):
        at_threshold = check_compatibility(selection(cpu={"tdp": 105}, psu={"power": 255}))
        self.assertTrue(at_threshold.compatible)

        one_below = check_compatibility(selection(cpu={"tdp": 105}, psu={"power": 254}))
        self.assertFalse(one_below.compatible)
        self.assertIn("recommended: 255W", one_below.issues[0])

    def test_psu_without_power_rating_is_not_flagged(self):
        for psu in ({"name": "x"}, {"power": None}, {"power": "n/a"}):
            with self.subTest(psu=psu):
                result = check_compatibility(selection(cpu={"tdp": 65}, psu=psu))
                self.assertTrue(result.compatible)
                self.assertEqual(result.issues, ())

    def test_psu_rated_zero_is_flagged(self):
        result = check_compatibility(selection(cpu={"tdp": 65}, psu={"power": 0}))
        self.assertEqual(
            result.issues,
            ("PSU wattage (0W) may be insufficient for this build (recommended: 215W)",),
        )

    def test_psu_alone_is_not_checked(self):
        self.assertTrue(check_compatibility(selection(psu={"power": 100})).compatible)

    def test_gpu_only_counts_toward_wattage(self):
        result = check_compatibility(selection(gpu={"tdp": 400}, psu={"power": 500}))
        self.assertIn("recommended: 550W", result.issues[0])

    def test_all_violations_are_collected_in_order(self):
        result = check_compatibility(
            selection(
                cpu={"socket": "AM4", "tdp": 200},
                motherboard={"socket": "AM5"},
                gpu={"tdp": 450},
                psu={"power": 600},
            )
        )
        self.assertEqual(len(result.issues), 2)
        self.assertTrue(result.issues[0].startswith("CPU socket"))
        self.assertTrue(result.issues[1].startswith("PSU wattage"))

    def test_model_instances_are_accepted(self):
        cpu = CPU(socket="LGA1700", cores=14, threads=20, base_clock=Decimal("3.50"), tdp=125)
        mobo = Motherboard(socket="LGA1700")
        psu = PSU(power=750)
        self.assertTrue(check_compatibility(selection(cpu=cpu, motherboard=mobo, psu=psu)).compatible)


class TestScoring(SimpleTestCase):
    def test_cpu_only_contribution(self):
        scores = performance_scores(
            selection(cpu={"socket": "AM5", "tdp": 105, "cores": 8, "base_clock": 3.6})
        )
        # 8 * 3.6 = 28.8 weighted 0.4 / 0.6 / 0.5
        self.assertEqual(scores.gaming, 12)
        self.assertEqual(scores.productivity, 17)
        self.assertEqual(scores.content, 14)

    def test_missing_fields_use_defaults(self):
        cpu_only = performance_scores(selection(cpu={}))
        self.assertEqual((cpu_only.gaming, cpu_only.productivity, cpu_only.content), (4, 6, 5))

        gpu_only = performance_scores(selection(gpu={}))
        self.assertEqual((gpu_only.gaming, gpu_only.productivity, gpu_only.content), (12, 6, 10))

        ram_only = performance_scores(selection(ram={}))
        self.assertEqual((ram_only.gaming, ram_only.productivity, ram_only.content), (3, 5, 5))

    def test_zero_and_malformed_values_fall_back_to_defaults(self):
        expected = performance_scores(selection(cpu={}))
        self.assertEqual(performance_scores(selection(cpu={"cores": 0, "base_clock": None})), expected)
        self.assertEqual(performance_scores(selection(cpu={"cores": "many", "base_clock": ""})), expected)
        self.assertEqual(performance_scores(selection(cpu={"cores": -8})), expected)

    def test_half_rounds_up(self):
        # 2 * 2.5 = 5.0; content weight 0.5 gives exactly 2.5
        scores = performance_scores(selection(cpu={"cores": 2, "base_clock": 2.5}))
        self.assertEqual(scores.content, 3)

    def test_scores_are_capped_at_100(self):
        scores = performance_scores(
            selection(
                cpu={"cores": 64, "base_clock": 5.0},
                gpu={"memory_size": 24, "tdp": 450},
                ram={"capacity": 128, "speed": 6400},
            )
        )
        self.assertEqual(scores.gaming, 100)
        self.assertEqual(scores.productivity, 100)
        self.assertEqual(scores.content, 100)

    def test_other_categories_do_not_score(self):
        scores = performance_scores(
            selection(storage={"capacity": 2000}, psu={"power": 1000}, monitor={"refresh_rate": 240})
        )
        self.assertEqual((scores.gaming, scores.productivity, scores.content), (0, 0, 0))

    def test_removing_a_part_never_raises_a_score(self):
        full = {
            "cpu": {"cores": 6, "base_clock": 3.2},
            "gpu": {"memory_size": 8, "tdp": 170},
            "ram": {"capacity": 16, "speed": 3600},
        }
        before = performance_scores(selection(**full))
        for category in full:
            reduced = dict(full)
            reduced.pop(category)
            after = performance_scores(selection(**reduced))
            self.assertLessEqual(after.gaming, before.gaming)
            self.assertLessEqual(after.productivity, before.productivity)
            self.assertLessEqual(after.content, before.content)


class TestEvaluateBuild(SimpleTestCase):
    def test_empty_build_is_not_evaluated(self):
        summary = evaluate_build(PartSelection())
        self.assertEqual(summary.total_price, Decimal("0.00"))
        self.assertEqual(summary.compatibility.issues, ())
        self.assertFalse(summary.evaluated)
        self.assertEqual(
            (summary.performance.gaming, summary.performance.productivity, summary.performance.content),
            (0, 0, 0),
        )

    def test_same_input_same_result(self):
        sel = selection(
            cpu={"socket": "AM5", "tdp": 105, "cores": 8, "base_clock": 3.6, "price": 329.99},
            motherboard={"socket": "AM5", "price": 189.5},
        )
        self.assertEqual(evaluate_build(sel), evaluate_build(sel))

    def test_total_price_treats_missing_prices_as_zero(self):
        parts = [
            CPU(name="Ryzen 7 7700X", price=Decimal("299.99")),
            {"price": "189.50"},
            {"price": None},
            {"name": "no price"},
            {"price": "n/a"},
        ]
        self.assertEqual(total_price(parts), Decimal("489.49"))

    def test_as_dict_shape(self):
        data = evaluate_build(selection(cpu={"socket": "AM5", "price": 100})).as_dict()
        self.assertEqual(data["totalPrice"], 100.0)
        self.assertEqual(data["compatibility"], {"compatible": True, "issues": []})
        self.assertEqual(set(data["performance"]), {"gaming", "productivity", "content"})
        self.assertTrue(data["evaluated"])

    def test_from_mapping_accepts_route_names_and_skips_unknown(self):
        sel = PartSelection.from_mapping({"cpus": {"socket": "AM5"}, "toaster": {}, "gpu": None})
        self.assertEqual([c for c, _ in sel.present()], ["cpu"])

    def test_number_helper(self):
        self.assertEqual(number("3.5", 1), 3.5)
        self.assertEqual(number(float("nan"), 1), 1)
        self.assertEqual(number(True, 7), 7)


class TestCompatibleComponents(SimpleTestCase):
    def setUp(self):
        self.boards = [
            {"id": 1, "name": "B650", "socket": "AM5"},
            {"id": 2, "name": "Z790", "socket": "LGA1700"},
        ]
        self.coolers = [
            {"id": 1, "name": "Hyper 212", "socket": "Universal"},
            {"id": 2, "name": "AM-only", "socket": "AM4, AM5"},
            {"id": 3, "name": "Intel-only", "socket": "LGA1700/LGA1200"},
        ]

    def test_cpu_to_motherboard(self):
        cpu = {"socket": "AM5"}
        matches = compatible_components(cpu, "cpu", "motherboard", self.boards)
        self.assertEqual([b["name"] for b in matches], ["B650"])

    def test_cpu_to_cooler(self):
        cpu = {"socket": "LGA1700"}
        matches = compatible_components(cpu, "cpu", "cooler", self.coolers)
        self.assertEqual([c["name"] for c in matches], ["Hyper 212", "Intel-only"])

    def test_cooler_to_motherboard(self):
        matches = compatible_components(self.coolers[1], "cooler", "motherboard", self.boards)
        self.assertEqual([b["name"] for b in matches], ["B650"])

    def test_unconstrained_pairing_returns_everything(self):
        rams = [{"id": 1}, {"id": 2}]
        self.assertEqual(compatible_components({"socket": "AM5"}, "cpu", "ram", rams), rams)


class TestSuggestBuild(SimpleTestCase):
    def setUp(self):
        self.catalog = {
            "cpu": [
                {"id": 1, "name": "Ryzen 5 7600", "socket": "AM5", "price": 200, "tdp": 65, "cores": 6, "base_clock": 3.8},
                {"id": 2, "name": "Core i9-13900K", "socket": "LGA1700", "price": 550, "tdp": 125, "cores": 24, "base_clock": 3.0},
            ],
            "motherboard": [
                {"id": 1, "name": "B650 ATX", "socket": "AM5", "price": 150, "form_factor": "ATX"},
                {"id": 2, "name": "B650I", "socket": "AM5", "price": 170, "form_factor": "Mini-ITX"},
                {"id": 3, "name": "Z790", "socket": "LGA1700", "price": 180, "form_factor": "ATX"},
            ],
            "gpu": [
                {"id": 1, "name": "RTX 4070", "price": 500, "tdp": 200, "memory_size": 12},
                {"id": 2, "name": "RTX 4080", "price": 1200, "tdp": 320, "memory_size": 16},
            ],
            "ram": [{"id": 1, "name": "32GB DDR5", "price": 90, "capacity": 32, "speed": 6000}],
            "storage": [{"id": 1, "name": "1TB NVMe", "price": 70}],
            "psu": [
                {"id": 1, "name": "400W", "price": 40, "power": 400},
                {"id": 2, "name": "650W", "price": 90, "power": 650},
            ],
            "case": [
                {"id": 1, "name": "Mid Tower", "price": 80, "form_factor": "ATX"},
                {"id": 2, "name": "ITX Box", "price": 90, "form_factor": "Mini-ITX"},
            ],
            "cooler": [{"id": 1, "name": "Hyper 212", "price": 40, "socket": "Universal"}],
        }

    def test_gaming_build_is_compatible(self):
        sel = suggest_build("gaming", 1500, self.catalog)
        self.assertEqual(sel.cpu["name"], "Ryzen 5 7600")
        self.assertEqual(sel.motherboard["socket"], "AM5")
        self.assertEqual(sel.gpu["name"], "RTX 4070")
        self.assertEqual(sel.psu["name"], "650W")
        self.assertTrue(evaluate_build(sel).compatibility.compatible)

    def test_budget_purpose_skips_gpu(self):
        sel = suggest_build("budget", 1500, self.catalog)
        self.assertIsNone(sel.gpu)

    def test_small_budget_skips_gpu(self):
        sel = suggest_build("gaming", 700, self.catalog)
        self.assertIsNone(sel.gpu)

    def test_compact_prefers_small_form_factor(self):
        sel = suggest_build("compact", 2000, self.catalog)
        self.assertEqual(sel.motherboard["form_factor"], "Mini-ITX")
        self.assertEqual(sel.case["form_factor"], "Mini-ITX")

    def test_budget_range_resolves_to_midpoint(self):
        self.assertEqual(resolve_budget("mid-range"), (801 + 1500) / 2)
        self.assertEqual(resolve_budget(999), 999)

    def test_rejects_unknown_purpose_and_bad_budget(self):
        with self.assertRaises(ValidationFailure):
            suggest_build("mining", 1000, self.catalog)
        with self.assertRaises(ValidationFailure):
            suggest_build("gaming", 0, self.catalog)

    def test_headroom_constant(self):
        self.assertEqual(build_calculator.PSU_HEADROOM_WATTS, 150)
