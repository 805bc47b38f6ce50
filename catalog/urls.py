from django.urls import path

from . import views

urlpatterns = [
    path("components/<str:ctype>", views.component_list, name="component_list"),
    path(
        "components/<str:ctype>/<int:pk>",
        views.component_detail,
        name="component_detail",
    ),
    path(
        "compatibility/<str:ctype>/<int:pk>/<str:target>",
        views.compatible_with,
        name="compatible_with",
    ),
    path(
        "admin/components/<str:ctype>",
        views.admin_component_create,
        name="admin_component_create",
    ),
    path(
        "admin/components/<str:ctype>/<int:pk>",
        views.admin_component_detail,
        name="admin_component_detail",
    ),
]
