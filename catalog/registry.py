"""Category registry: maps category keys to models and serializes entries."""

from decimal import Decimal

from pcbuilder.errors import NotFound

from .models import (
    CPU,
    GPU,
    PSU,
    RAM,
    Case,
    Cooler,
    Headset,
    Keyboard,
    Monitor,
    Motherboard,
    Mouse,
    Speaker,
    Storage,
    Webcam,
)

COMPONENT_MODELS = {
    "cpu": CPU,
    "gpu": GPU,
    "motherboard": Motherboard,
    "ram": RAM,
    "storage": Storage,
    "psu": PSU,
    "case": Case,
    "cooler": Cooler,
    "monitor": Monitor,
    "keyboard": Keyboard,
    "mouse": Mouse,
    "headset": Headset,
    "speaker": Speaker,
    "webcam": Webcam,
}

CATEGORIES = tuple(COMPONENT_MODELS)

# Route names used by the catalog's table-per-category URLs.
CATEGORY_ALIASES = {
    "cpus": "cpu",
    "gpus": "gpu",
    "motherboards": "motherboard",
    "rams": "ram",
    "psus": "psu",
    "cases": "case",
    "coolers": "cooler",
    "monitors": "monitor",
    "keyboards": "keyboard",
    "mice": "mouse",
    "headsets": "headset",
    "speakers": "speaker",
    "webcams": "webcam",
}

COMMON_FIELDS = ("name", "price", "image_url")


def resolve_category(name):
    key = str(name or "").strip().lower()
    key = CATEGORY_ALIASES.get(key, key)
    if key not in COMPONENT_MODELS:
        raise NotFound(f"Unknown component type '{name}'")
    return key


def model_for(category):
    return COMPONENT_MODELS[resolve_category(category)]


def editable_fields(category):
    """Allow-listed column names an admin may write for ``category``."""
    Model = model_for(category)
    attrs = [
        f.name
        for f in Model._meta.concrete_fields
        if f.name not in COMMON_FIELDS and not f.primary_key
    ]
    return list(COMMON_FIELDS) + attrs


def get_component(category, pk):
    Model = model_for(category)
    try:
        return Model.objects.get(pk=pk)
    except (Model.DoesNotExist, ValueError, TypeError):
        raise NotFound("Component not found")


def _plain(value):
    if isinstance(value, Decimal):
        return float(value)
    return value


def serialize_component(obj):
    data = {"id": obj.pk}
    for field in obj._meta.concrete_fields:
        if field.primary_key:
            continue
        data[field.name] = _plain(getattr(obj, field.name))
    return data
