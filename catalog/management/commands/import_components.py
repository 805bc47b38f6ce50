import logging
import re

import pandas as pd
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, models
from tqdm import tqdm

from catalog.registry import editable_fields, model_for, resolve_category
from pcbuilder.errors import NotFound

logger = logging.getLogger(__name__)

# Spreadsheet headers seen in vendor exports, mapped to model fields.
HEADER_ALIASES = {
    "price_usd": "price",
    "image": "image_url",
    "base_clock_ghz": "base_clock",
    "boost_clock_ghz": "boost_clock",
    "core_count": "cores",
    "thread_count": "threads",
    "vram": "memory_size",
    "memory_size_gb": "memory_size",
    "capacity_gb": "capacity",
    "speed_mhz": "speed",
    "frequency_mhz": "speed",
    "wattage": "power",
    "efficiency": "efficiency_rating",
}

TRUE_VALUES = {"1", "true", "yes", "y"}


def normalize_header(header):
    key = re.sub(r"[^a-z0-9]+", "_", str(header).strip().lower()).strip("_")
    return HEADER_ALIASES.get(key, key)


def clean_number(value):
    s = str(value).strip().replace(",", "")
    m = re.search(r"[-+]?\d*\.?\d+", s)
    return m.group(0) if m else ""


def coerce(field, value):
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    if str(value).strip() in ("", "N/A"):
        return None
    if isinstance(field, models.BooleanField):
        return str(value).strip().lower() in TRUE_VALUES
    if isinstance(field, (models.IntegerField, models.DecimalField)):
        raw = clean_number(value)
        if raw == "":
            return None
        if isinstance(field, models.IntegerField):
            return int(float(raw))
        return raw
    return str(value).strip()


def has_price(data):
    try:
        return data.get("price") is not None and float(data["price"]) > 0
    except (TypeError, ValueError):
        return False


class Command(BaseCommand):
    help = "Import catalog components of one category from a CSV file"

    def add_arguments(self, parser):
        parser.add_argument("--category", required=True)
        parser.add_argument("--csv", required=True)
        parser.add_argument("--dry-run", action="store_true")
        parser.add_argument("--require-price", action="store_true")

    def handle(self, *args, **options):
        try:
            category = resolve_category(options["category"])
        except NotFound as exc:
            raise CommandError(exc.message)
        Model = model_for(category)
        allowed = set(editable_fields(category))
        model_fields = {f.name: f for f in Model._meta.concrete_fields}

        try:
            df = pd.read_csv(options["csv"])
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise CommandError(f"Could not read {options['csv']}: {exc}")
        df.columns = [normalize_header(c) for c in df.columns]
        df = df[[c for c in df.columns if c in allowed]]
        if "name" not in df.columns:
            raise CommandError("CSV needs a name column")
        df = df.dropna(subset=["name"])

        count = created = updated = skipped = 0
        rows = df.to_dict(orient="records")
        for row_idx, row in enumerate(
            tqdm(rows, desc=f"Importing {category}", unit="row", disable=options["verbosity"] < 1),
            start=1,
        ):
            data = {}
            for key, value in row.items():
                val = coerce(model_fields[key], value)
                if val is not None:
                    data[key] = val

            if options["require_price"] and not has_price(data):
                skipped += 1
                self.stdout.write(f"Row {row_idx} skipped: missing/zero price")
                continue

            if options["dry_run"]:
                self.stdout.write(f"[DRY-RUN] Row {row_idx} normalized: {data}")
                count += 1
                continue

            name = data.pop("name")
            try:
                _, created_flag = Model.objects.update_or_create(name=name, defaults=data)
            except (DatabaseError, ValidationError, ValueError) as exc:
                skipped += 1
                self.stdout.write(f"Row {row_idx} skipped: {exc}")
                continue
            if created_flag:
                created += 1
            else:
                updated += 1
            count += 1

        summary = "Processed {} rows for {}: {} created, {} updated, {} skipped".format(
            count, category, created, updated, skipped
        )
        logger.info(summary)
        if options["dry_run"]:
            self.stdout.write(self.style.WARNING("[DRY-RUN] " + summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))
