import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from accounts.decorators import admin_required
from builder.services.build_calculator import compatible_components
from pcbuilder.api import form_errors, json_body, validated
from pcbuilder.errors import ValidationFailure

from .forms import ComponentFilterForm, component_form_class
from .registry import (
    editable_fields,
    get_component,
    model_for,
    resolve_category,
    serialize_component,
)

logger = logging.getLogger(__name__)


@require_GET
def component_list(request, ctype):
    Model = model_for(ctype)
    form = ComponentFilterForm(request.GET)
    validated(form, "Invalid catalog filter")
    return JsonResponse(
        [serialize_component(obj) for obj in form.filter(Model.objects.all())], safe=False
    )


@require_GET
def component_detail(request, ctype, pk):
    obj = get_component(ctype, pk)
    return JsonResponse(serialize_component(obj))


@require_GET
def compatible_with(request, ctype, pk, target):
    category = resolve_category(ctype)
    target = resolve_category(target)
    part = get_component(category, pk)
    candidates = model_for(target).objects.all()
    matches = compatible_components(part, category, target, candidates)
    return JsonResponse([serialize_component(obj) for obj in matches], safe=False)


def _component_payload(category, request, instance=None):
    data = json_body(request)
    allowed = set(editable_fields(category))
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValidationFailure(
            "Unknown fields for this component type",
            fields={k: ["Not an editable field"] for k in unknown},
        )
    if instance is not None:
        merged = serialize_component(instance)
        merged.pop("id", None)
        merged.update(data)
        data = merged
    return data


@csrf_exempt
@require_POST
@admin_required
def admin_component_create(request, ctype):
    category = resolve_category(ctype)
    form = component_form_class(category)(_component_payload(category, request))
    if not form.is_valid():
        raise ValidationFailure(fields=form_errors(form))
    obj = form.save()
    logger.info("Admin %s created %s #%s", request.user.pk, category, obj.pk)
    return JsonResponse(
        {"message": "Component created successfully", "id": obj.pk}, status=201
    )


@csrf_exempt
@require_http_methods(["PUT", "PATCH", "DELETE"])
@admin_required
def admin_component_detail(request, ctype, pk):
    category = resolve_category(ctype)
    obj = get_component(category, pk)

    if request.method == "DELETE":
        obj.delete()
        logger.info("Admin %s deleted %s #%s", request.user.pk, category, pk)
        return JsonResponse({"message": "Component deleted successfully"})

    form = component_form_class(category)(
        _component_payload(category, request, instance=obj), instance=obj
    )
    if not form.is_valid():
        raise ValidationFailure(fields=form_errors(form))
    form.save()
    logger.info("Admin %s updated %s #%s", request.user.pk, category, pk)
    return JsonResponse({"message": "Component updated successfully"})
