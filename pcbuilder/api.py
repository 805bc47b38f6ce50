import json

from .errors import ValidationFailure


def json_body(request):
    """Decode a JSON object request body, or raise ``ValidationFailure``."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        raise ValidationFailure("Request body must be valid JSON")
    if not isinstance(data, dict):
        raise ValidationFailure("Request body must be a JSON object")
    return data


def form_errors(form):
    return {field: [str(e) for e in errs] for field, errs in form.errors.items()}


def validated(form, message="Invalid submission"):
    if not form.is_valid():
        raise ValidationFailure(message, fields=form_errors(form))
    return form.cleaned_data
