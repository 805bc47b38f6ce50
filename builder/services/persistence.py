"""Saved builds: transactional writes and component-resolving reads.

A build is stored as a header row plus one ``BuildComponent`` row per
(category, component id) pair. Reads resolve each pair against its category's
catalog table. Components deleted from the catalog since the build was saved
are left out of ``components`` and counted in ``missing_components``; the
stored ``total_price`` is reported as saved.
"""

import logging
from collections import defaultdict
from decimal import Decimal, InvalidOperation

from django.db import DatabaseError, transaction

from catalog.registry import CATEGORIES, COMPONENT_MODELS, serialize_component
from pcbuilder.errors import NotFound, PersistenceFailure, ValidationFailure

from ..models import Build, BuildComponent

logger = logging.getLogger(__name__)

# Build.total_price is DecimalField(max_digits=10, decimal_places=2)
MAX_PRICE = Decimal(10) ** 8


def _clean_price(total_price):
    try:
        price = Decimal(str(total_price))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationFailure(
            "Total price must be a number", fields={"totalPrice": ["Invalid number"]}
        )
    if not price.is_finite() or price < 0:
        raise ValidationFailure(
            "Total price must be a non-negative number",
            fields={"totalPrice": ["Invalid number"]},
        )
    if price >= MAX_PRICE:
        raise ValidationFailure(
            "Total price is too large",
            fields={"totalPrice": [f"Must be less than {MAX_PRICE}"]},
        )
    return price.quantize(Decimal("0.01"))


def _clean_components(components):
    cleaned = []
    errors = {}
    for category, component_id in components:
        if category not in CATEGORIES:
            errors[str(category)] = ["Unknown component type"]
            continue
        if isinstance(component_id, bool) or (
            isinstance(component_id, float) and not component_id.is_integer()
        ):
            errors[category] = ["Component id must be a positive integer"]
            continue
        try:
            component_id = int(component_id)
        except (TypeError, ValueError):
            errors[category] = ["Component id must be a positive integer"]
            continue
        if component_id <= 0:
            errors[category] = ["Component id must be a positive integer"]
            continue
        if any(c == category for c, _ in cleaned):
            errors[category] = ["Only one component per type"]
            continue
        cleaned.append((category, component_id))
    if errors:
        raise ValidationFailure("Invalid build components", fields=errors)
    return cleaned


def _ensure_components_exist(components):
    by_category = defaultdict(set)
    for category, component_id in components:
        by_category[category].add(component_id)
    for category, ids in by_category.items():
        found = set(
            COMPONENT_MODELS[category].objects.filter(pk__in=ids).values_list("pk", flat=True)
        )
        missing = sorted(ids - found)
        if missing:
            raise NotFound(f"Component not found: {category} #{missing[0]}")


def create_build(user, name, total_price, components, description=""):
    """Persist a build header and its component rows atomically.

    Returns the new build id. Nothing is written when any row fails.
    """
    name = (name or "").strip()
    if not name:
        raise ValidationFailure("Build name is required", fields={"name": ["Required"]})
    price = _clean_price(total_price)
    components = _clean_components(components)
    _ensure_components_exist(components)

    try:
        with transaction.atomic():
            build = Build.objects.create(
                user=user,
                name=name,
                description=description or "",
                total_price=price,
            )
            for category, component_id in components:
                BuildComponent.objects.create(
                    build=build,
                    component_type=category,
                    component_id=component_id,
                )
    except DatabaseError as exc:
        logger.exception("Saving build '%s' for user %s failed; rolled back", name, user.pk)
        raise PersistenceFailure("Build could not be saved") from exc

    logger.info(
        "Saved build %s for user %s with %d components", build.pk, user.pk, len(components)
    )
    return build.pk


def _resolve(builds):
    """Load every referenced component with one query per category."""
    wanted = defaultdict(set)
    for build in builds:
        for row in build.components.all():
            wanted[row.component_type].add(row.component_id)
    resolved = {}
    for category, ids in wanted.items():
        Model = COMPONENT_MODELS.get(category)
        if Model is None:
            continue
        for pk, obj in Model.objects.in_bulk(list(ids)).items():
            resolved[(category, pk)] = obj
    return resolved


def serialize_build(build, resolved):
    components = []
    missing = 0
    for row in build.components.all():
        obj = resolved.get((row.component_type, row.component_id))
        if obj is None:
            missing += 1
            continue
        components.append({"type": row.component_type, **serialize_component(obj)})
    return {
        "id": build.pk,
        "user_id": build.user_id,
        "name": build.name,
        "description": build.description,
        "total_price": float(build.total_price),
        "created_at": build.created_at.isoformat(),
        "components": components,
        "missing_components": missing,
    }


def list_builds(user):
    builds = list(
        Build.objects.filter(user=user).prefetch_related("components")
    )
    resolved = _resolve(builds)
    return [serialize_build(b, resolved) for b in builds]


def list_all_builds():
    builds = list(
        Build.objects.select_related("user").prefetch_related("components")
    )
    resolved = _resolve(builds)
    data = []
    for build in builds:
        item = serialize_build(build, resolved)
        item["user_name"] = build.user.name
        item["user_email"] = build.user.email
        data.append(item)
    return data


def get_build(build_id, user=None):
    """Fetch a build; with ``user``, only its owner or an admin may see it."""
    qs = Build.objects.prefetch_related("components")
    if user is not None and not getattr(user, "is_admin", False):
        qs = qs.filter(user=user)
    try:
        build = qs.get(pk=build_id)
    except Build.DoesNotExist:
        raise NotFound("Build not found")
    return serialize_build(build, _resolve([build]))


def delete_build(build_id, user):
    qs = Build.objects.all()
    if not getattr(user, "is_admin", False):
        qs = qs.filter(user=user)
    deleted, _ = qs.filter(pk=build_id).delete()
    if not deleted:
        raise NotFound("Build not found")
    logger.info("User %s deleted build %s", user.pk, build_id)
