from django.urls import path

from . import views

urlpatterns = [
    # Compatibility, scores and price for an in-progress build
    path("builder/evaluate", views.evaluate, name="evaluate_build"),
    # Starting build for a purpose and budget
    path("builder/auto", views.auto_build, name="auto_build"),
    # Saved builds of the authenticated user
    path("builds", views.builds, name="builds"),
    path("builds/<int:pk>", views.build_detail, name="build_detail"),
    path("admin/builds", views.admin_builds, name="admin_builds"),
    path("admin/builds/<int:pk>", views.admin_build_detail, name="admin_build_detail"),
]
