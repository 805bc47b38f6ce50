import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Tuple

from catalog.registry import CATEGORIES, resolve_category
from pcbuilder.errors import NotFound, ValidationFailure

PSU_HEADROOM_WATTS = 150

SCORE_CAP = 100

CPU_DEFAULTS = {"cores": 4, "base_clock": 2.5}
GPU_DEFAULTS = {"memory_size": 4, "tdp": 150}
RAM_DEFAULTS = {"capacity": 8, "speed": 3200}

SCORE_WEIGHTS = {
    "cpu": {"gaming": 0.4, "productivity": 0.6, "content": 0.5},
    "gpu": {"gaming": 0.6, "productivity": 0.3, "content": 0.5},
    "ram": {"gaming": 0.1, "productivity": 0.2, "content": 0.2},
}

BUDGET_RANGES = {
    "budget": (0, 800),
    "mid-range": (801, 1500),
    "high-end": (1501, 3000),
    "extreme": (3001, 10000),
}

# Share of the budget each core part may take, per build purpose.
PURPOSE_SHARES = {
    "gaming": {
        "cpu": 0.20, "gpu": 0.38, "motherboard": 0.12, "ram": 0.08,
        "storage": 0.08, "psu": 0.06, "case": 0.05, "cooler": 0.03,
    },
    "content": {
        "cpu": 0.28, "gpu": 0.28, "motherboard": 0.12, "ram": 0.12,
        "storage": 0.09, "psu": 0.05, "case": 0.03, "cooler": 0.03,
    },
    "office": {
        "cpu": 0.32, "gpu": 0.0, "motherboard": 0.20, "ram": 0.14,
        "storage": 0.14, "psu": 0.09, "case": 0.07, "cooler": 0.04,
    },
    "budget": {
        "cpu": 0.30, "gpu": 0.0, "motherboard": 0.20, "ram": 0.14,
        "storage": 0.14, "psu": 0.10, "case": 0.08, "cooler": 0.04,
    },
    "compact": {
        "cpu": 0.22, "gpu": 0.32, "motherboard": 0.14, "ram": 0.08,
        "storage": 0.08, "psu": 0.07, "case": 0.06, "cooler": 0.03,
    },
}

GPU_MIN_BUDGET = 800

COMPACT_FORM_FACTORS = ("Mini-ITX", "Micro-ATX")

# Motherboard form factors each case form factor can hold.
CASE_FITS = {
    "ATX": {"ATX", "Micro-ATX", "Mini-ITX"},
    "Micro-ATX": {"Micro-ATX", "Mini-ITX"},
    "Mini-ITX": {"Mini-ITX"},
}

UNIVERSAL_SOCKET = "universal"


@dataclass
class PartSelection:
    """One optional slot per catalog category."""

    cpu: object = None
    gpu: object = None
    motherboard: object = None
    ram: object = None
    storage: object = None
    psu: object = None
    case: object = None
    cooler: object = None
    monitor: object = None
    keyboard: object = None
    mouse: object = None
    headset: object = None
    speaker: object = None
    webcam: object = None

    @classmethod
    def from_mapping(cls, mapping):
        selection = cls()
        for key, part in (mapping or {}).items():
            if part is None:
                continue
            try:
                category = resolve_category(key)
            except NotFound:
                continue
            setattr(selection, category, part)
        return selection

    def present(self) -> List[Tuple[str, object]]:
        return [
            (category, getattr(self, category))
            for category in CATEGORIES
            if getattr(self, category) is not None
        ]

    def is_empty(self) -> bool:
        return not self.present()

    def as_dict(self) -> Dict[str, object]:
        return dict(self.present())


@dataclass(frozen=True)
class Compatibility:
    compatible: bool
    issues: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Performance:
    gaming: int = 0
    productivity: int = 0
    content: int = 0


@dataclass(frozen=True)
class BuildSummary:
    total_price: Decimal
    compatibility: Compatibility
    performance: Performance
    evaluated: bool

    def as_dict(self):
        return {
            "totalPrice": float(self.total_price),
            "compatibility": {
                "compatible": self.compatibility.compatible,
                "issues": list(self.compatibility.issues),
            },
            "performance": {
                "gaming": self.performance.gaming,
                "productivity": self.performance.productivity,
                "content": self.performance.content,
            },
            "evaluated": self.evaluated,
        }


# --- Field access ---
def part_value(part, name):
    """Read ``name`` from a model instance or a plain dict record."""
    if part is None:
        return None
    if isinstance(part, dict):
        return part.get(name)
    return getattr(part, name, None)


def number(value, default=0.0) -> float:
    """Coerce a measurement to float.

    Missing, malformed, non-finite and non-positive values all fall back to
    ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        n = float(value)
    except (TypeError, ValueError, InvalidOperation):
        return default
    if not math.isfinite(n) or n <= 0:
        return default
    return n


def _reading(value):
    """Parse a measurement as given, or None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        n = float(value)
    except (TypeError, ValueError, InvalidOperation):
        return None
    return n if math.isfinite(n) else None


def _label(value) -> str:
    return "" if value is None else str(value)


def _fmt(n: float):
    return int(n) if float(n).is_integer() else n


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _price(part) -> Decimal:
    raw = part_value(part, "price")
    if raw is None or isinstance(raw, bool):
        return Decimal("0")
    try:
        price = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not price.is_finite():
        return Decimal("0")
    return price


# --- Compatibility ---
def required_wattage(cpu, gpu) -> float:
    return (
        number(part_value(cpu, "tdp"), 0)
        + number(part_value(gpu, "tdp"), 0)
        + PSU_HEADROOM_WATTS
    )


def check_compatibility(selection: PartSelection) -> Compatibility:
    issues: List[str] = []

    cpu, motherboard, gpu, psu = (
        selection.cpu, selection.motherboard, selection.gpu, selection.psu
    )

    if cpu is not None and motherboard is not None:
        cpu_socket = _label(part_value(cpu, "socket"))
        board_socket = _label(part_value(motherboard, "socket"))
        if cpu_socket != board_socket:
            issues.append(
                f"CPU socket {cpu_socket} is not compatible with "
                f"motherboard socket {board_socket}"
            )

    if psu is not None and (cpu is not None or gpu is not None):
        required = required_wattage(cpu, gpu)
        power = _reading(part_value(psu, "power"))
        # an unreadable rating is skipped; a real 0 still counts
        if power is not None and power < required:
            issues.append(
                f"PSU wattage ({_fmt(power)}W) may be insufficient for this "
                f"build (recommended: {_fmt(required)}W)"
            )

    return Compatibility(compatible=not issues, issues=tuple(issues))


# --- Scoring ---
def cpu_score(cpu) -> float:
    return (
        number(part_value(cpu, "cores"), CPU_DEFAULTS["cores"])
        * number(part_value(cpu, "base_clock"), CPU_DEFAULTS["base_clock"])
    )


def gpu_score(gpu) -> float:
    return (
        number(part_value(gpu, "memory_size"), GPU_DEFAULTS["memory_size"])
        * number(part_value(gpu, "tdp"), GPU_DEFAULTS["tdp"])
        / 30
    )


def ram_score(ram) -> float:
    return (
        number(part_value(ram, "capacity"), RAM_DEFAULTS["capacity"])
        * number(part_value(ram, "speed"), RAM_DEFAULTS["speed"])
        / 1000
    )


SCORERS = {"cpu": cpu_score, "gpu": gpu_score, "ram": ram_score}


def _scale(raw: float) -> int:
    return max(0, min(SCORE_CAP, _round_half_up(raw)))


def performance_scores(selection: PartSelection) -> Performance:
    totals = {"gaming": 0.0, "productivity": 0.0, "content": 0.0}
    for category, scorer in SCORERS.items():
        part = getattr(selection, category)
        if part is None:
            continue
        base = scorer(part)
        for axis, weight in SCORE_WEIGHTS[category].items():
            totals[axis] += base * weight
    return Performance(
        gaming=_scale(totals["gaming"]),
        productivity=_scale(totals["productivity"]),
        content=_scale(totals["content"]),
    )


def total_price(parts: Iterable[object]) -> Decimal:
    total = Decimal("0")
    for part in parts:
        if part is not None:
            total += _price(part)
    return total.quantize(Decimal("0.01"))


def evaluate_build(selection: PartSelection) -> BuildSummary:
    return BuildSummary(
        total_price=total_price(part for _, part in selection.present()),
        compatibility=check_compatibility(selection),
        performance=performance_scores(selection),
        evaluated=not selection.is_empty(),
    )


# --- Compatible component lookup ---
def _sockets(value) -> set:
    """Split a cooler's socket list ('AM4, AM5/LGA1700') into labels."""
    raw = _label(value).replace("/", ",")
    return {s.strip().lower() for s in raw.split(",") if s.strip()}


def _cooler_fits(cooler, socket) -> bool:
    supported = _sockets(part_value(cooler, "socket"))
    return UNIVERSAL_SOCKET in supported or _label(socket).lower() in supported


SOCKET_CATEGORIES = ("cpu", "motherboard")


def compatible_components(part, category: str, target: str, candidates: Iterable[object]):
    """Return the ``candidates`` of category ``target`` that fit ``part``.

    Only socket pairings constrain the result: cpu and motherboard must share
    a socket, and a cooler must list that socket or be universal. Pairings
    without a rule return every candidate.
    """
    candidates = list(candidates)
    if category in SOCKET_CATEGORIES:
        socket = _label(part_value(part, "socket"))
        if target in SOCKET_CATEGORIES:
            return [c for c in candidates if _label(part_value(c, "socket")) == socket]
        if target == "cooler":
            return [c for c in candidates if _cooler_fits(c, socket)]
    if category == "cooler" and target in SOCKET_CATEGORIES:
        return [c for c in candidates if _cooler_fits(part, part_value(c, "socket"))]
    return candidates


# --- Automatic build ---
def resolve_budget(budget) -> float:
    if isinstance(budget, str) and budget.strip().lower() in BUDGET_RANGES:
        low, high = BUDGET_RANGES[budget.strip().lower()]
        return (low + high) / 2
    value = number(budget, 0)
    if value <= 0:
        raise ValidationFailure(
            "Budget must be a positive number or a known range",
            fields={"budget": ["Invalid budget"]},
        )
    return value


def _price_f(part) -> float:
    return float(_price(part))


def _pick(candidates, allowance):
    candidates = list(candidates)
    if not candidates:
        return None
    affordable = [p for p in candidates if _price_f(p) <= allowance]
    if affordable:
        return max(affordable, key=_price_f)
    return min(candidates, key=_price_f)


def suggest_build(purpose: str, budget, catalog) -> PartSelection:
    """Assemble a starting build for ``purpose`` from ``catalog``.

    ``catalog`` maps category keys to iterables of parts. Each core part gets
    a fixed share of the budget and the most expensive part inside that share
    wins; when nothing fits, the cheapest one is used.
    """
    purpose = (purpose or "").strip().lower()
    if purpose not in PURPOSE_SHARES:
        raise ValidationFailure(
            f"Unknown build purpose '{purpose}'",
            fields={"purpose": ["Unknown purpose"]},
        )
    amount = resolve_budget(budget)
    shares = PURPOSE_SHARES[purpose]
    allowance = {k: amount * share for k, share in shares.items()}

    def pool(category):
        return list(catalog.get(category) or [])

    selection = PartSelection()
    selection.cpu = _pick(pool("cpu"), allowance["cpu"])
    socket = _label(part_value(selection.cpu, "socket"))

    boards = pool("motherboard")
    if selection.cpu is not None:
        boards = [b for b in boards if _label(part_value(b, "socket")) == socket]
    if purpose == "compact":
        small = [b for b in boards if part_value(b, "form_factor") in COMPACT_FORM_FACTORS]
        boards = small or boards
    selection.motherboard = _pick(boards, allowance["motherboard"])

    skip_gpu = shares["gpu"] == 0 or amount < GPU_MIN_BUDGET
    if not skip_gpu:
        selection.gpu = _pick(pool("gpu"), allowance["gpu"])

    selection.ram = _pick(pool("ram"), allowance["ram"])
    selection.storage = _pick(pool("storage"), allowance["storage"])

    coolers = pool("cooler")
    if selection.cpu is not None:
        coolers = [c for c in coolers if _cooler_fits(c, socket)] or coolers
    selection.cooler = _pick(coolers, allowance["cooler"])

    cases = pool("case")
    board_ff = part_value(selection.motherboard, "form_factor")
    if board_ff:
        cases = [c for c in cases if board_ff in CASE_FITS.get(part_value(c, "form_factor"), ())] or cases
    if purpose == "compact":
        cases = [c for c in cases if part_value(c, "form_factor") in COMPACT_FORM_FACTORS] or cases
    selection.case = _pick(cases, allowance["case"])

    needed = required_wattage(selection.cpu, selection.gpu)
    psus = pool("psu")
    psus = [p for p in psus if number(part_value(p, "power"), 0) >= needed] or psus
    selection.psu = _pick(psus, allowance["psu"])

    return selection
