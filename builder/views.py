import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from accounts.decorators import admin_required, token_required
from catalog.registry import COMPONENT_MODELS, get_component, resolve_category, serialize_component
from pcbuilder.api import json_body
from pcbuilder.errors import NotFound, ValidationFailure

from .services import persistence
from .services.build_calculator import (
    PartSelection,
    evaluate_build,
    suggest_build,
    total_price,
)

logger = logging.getLogger(__name__)


def _component_entries(data):
    components = data.get("components") or {}
    if not isinstance(components, dict):
        raise ValidationFailure(
            "components must map component types to components",
            fields={"components": ["Expected an object"]},
        )
    entries = []
    errors = {}
    seen = set()
    for key, value in components.items():
        if value is None:
            continue
        try:
            category = resolve_category(key)
        except NotFound:
            errors[str(key)] = ["Unknown component type"]
            continue
        if category in seen:
            errors[str(key)] = [f"Duplicate entry for {category}"]
            continue
        seen.add(category)
        entries.append((category, value))
    if errors:
        raise ValidationFailure("Invalid build components", fields=errors)
    return entries


def _component_id(category, value):
    if isinstance(value, dict):
        value = value.get("id")
    if isinstance(value, bool) or value is None:
        raise ValidationFailure(
            "Invalid build components", fields={category: ["Missing component id"]}
        )
    if isinstance(value, float) and not value.is_integer():
        raise ValidationFailure(
            "Invalid build components", fields={category: ["Invalid component id"]}
        )
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationFailure(
            "Invalid build components", fields={category: ["Invalid component id"]}
        )


def _is_reference(value):
    if isinstance(value, dict):
        return set(value) <= {"id", "type"}
    return True


def _selection_from(entries):
    """Build a selection from full records, or catalog lookups for bare ids."""
    parts = {}
    for category, value in entries:
        if _is_reference(value):
            parts[category] = get_component(category, _component_id(category, value))
        else:
            parts[category] = value
    return PartSelection.from_mapping(parts)


@csrf_exempt
@require_POST
def evaluate(request):
    selection = _selection_from(_component_entries(json_body(request)))
    return JsonResponse(evaluate_build(selection).as_dict())


@csrf_exempt
@require_POST
def auto_build(request):
    data = json_body(request)
    catalog = {
        category: list(COMPONENT_MODELS[category].objects.all())
        for category in ("cpu", "gpu", "motherboard", "ram", "storage", "psu", "case", "cooler")
    }
    selection = suggest_build(data.get("purpose"), data.get("budget"), catalog)
    return JsonResponse(
        {
            "components": {
                category: serialize_component(part) for category, part in selection.present()
            },
            "summary": evaluate_build(selection).as_dict(),
        }
    )


@csrf_exempt
@require_http_methods(["GET", "POST"])
@token_required
def builds(request):
    if request.method == "GET":
        return JsonResponse(persistence.list_builds(request.user), safe=False)

    data = json_body(request)
    refs = [
        (category, _component_id(category, value))
        for category, value in _component_entries(data)
    ]
    price = data.get("totalPrice", data.get("total_price"))
    if price is None:
        # Fall back to current catalog prices when the client sent no total.
        price = total_price(get_component(c, pk) for c, pk in refs)
    build_id = persistence.create_build(
        request.user,
        data.get("name"),
        price,
        refs,
        description=data.get("description") or "",
    )
    return JsonResponse(
        {"message": "Build saved successfully", "buildId": build_id}, status=201
    )


@csrf_exempt
@require_http_methods(["GET", "DELETE"])
@token_required
def build_detail(request, pk):
    if request.method == "DELETE":
        persistence.delete_build(pk, request.user)
        return JsonResponse({"message": "Build deleted successfully"})
    return JsonResponse(persistence.get_build(pk, user=request.user))


@require_GET
@admin_required
def admin_builds(request):
    return JsonResponse(persistence.list_all_builds(), safe=False)


@csrf_exempt
@require_http_methods(["DELETE"])
@admin_required
def admin_build_detail(request, pk):
    persistence.delete_build(pk, request.user)
    return JsonResponse({"message": "Build deleted successfully"})
