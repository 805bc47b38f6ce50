from django import forms

from .registry import editable_fields, model_for

SORT_ORDERS = {
    "name-asc": ("name", "id"),
    "name-desc": ("-name", "-id"),
    "price-asc": ("price", "name", "id"),
    "price-desc": ("-price", "name", "id"),
}


def component_form_class(category):
    """ModelForm restricted to the allow-listed columns of ``category``."""
    return forms.modelform_factory(model_for(category), fields=editable_fields(category))


class ComponentFilterForm(forms.Form):
    """Query string of the catalog list: name search, price range and sort."""

    q = forms.CharField(required=False, strip=True)
    min_price = forms.DecimalField(required=False, min_value=0)
    max_price = forms.DecimalField(required=False, min_value=0)
    sort = forms.ChoiceField(
        required=False, choices=[(key, key) for key in SORT_ORDERS]
    )

    def filter(self, queryset):
        data = self.cleaned_data
        if data.get("q"):
            queryset = queryset.filter(name__icontains=data["q"])
        if data.get("min_price") is not None:
            queryset = queryset.filter(price__gte=data["min_price"])
        if data.get("max_price") is not None:
            queryset = queryset.filter(price__lte=data["max_price"])
        if data.get("sort"):
            queryset = queryset.order_by(*SORT_ORDERS[data["sort"]])
        return queryset
