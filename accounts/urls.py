from django.urls import path

from . import views

urlpatterns = [
    path("auth/register", views.register, name="register"),
    path("auth/login", views.login, name="login"),
    path("auth/me", views.me, name="me"),
    path("users/profile", views.profile, name="profile"),
    path("admin/users", views.admin_users, name="admin_users"),
    path("admin/users/<int:pk>", views.admin_user_detail, name="admin_user_detail"),
]
