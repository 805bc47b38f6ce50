import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import IntegrityError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from pcbuilder.api import json_body, validated
from pcbuilder.errors import AuthRequired, Conflict, NotFound, ValidationFailure

from .decorators import admin_required, token_required
from .forms import LoginForm, ProfileForm, RegisterForm, RoleForm
from .tokens import issue_token

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def register(request):
    data = validated(RegisterForm(json_body(request)))
    User = get_user_model()
    if User.objects.filter(email__iexact=data["email"]).exists():
        raise Conflict("User with this email already exists")
    try:
        user = User.objects.create_user(
            email=data["email"], password=data["password"], name=data["name"]
        )
    except IntegrityError:
        raise Conflict("User with this email already exists")
    logger.info("Registered user %s", user.pk)
    return JsonResponse(
        {
            "message": "User registered successfully",
            "token": issue_token(user),
            "user": user.as_dict(),
        },
        status=201,
    )


@csrf_exempt
@require_POST
def login(request):
    data = validated(LoginForm(json_body(request)))
    user = authenticate(request, email=data["email"], password=data["password"])
    if user is None:
        raise AuthRequired("Invalid email or password")
    return JsonResponse(
        {
            "message": "Login successful",
            "token": issue_token(user),
            "user": user.as_dict(),
        }
    )


@require_GET
@token_required
def me(request):
    return JsonResponse({"user": request.user.as_dict()})


@csrf_exempt
@require_http_methods(["PUT", "PATCH"])
@token_required
def profile(request):
    user = request.user
    data = validated(ProfileForm(json_body(request), user=user))
    if data.get("name"):
        user.name = data["name"]
    if data.get("email"):
        user.email = data["email"]
    if data.get("password"):
        user.set_password(data["password"])
    user.save()
    return JsonResponse({"message": "Profile updated", "user": user.as_dict()})


# --- Admin ---
@require_GET
@admin_required
def admin_users(request):
    User = get_user_model()
    return JsonResponse([u.as_dict() for u in User.objects.all()], safe=False)


def _get_user(pk):
    User = get_user_model()
    try:
        return User.objects.get(pk=pk)
    except User.DoesNotExist:
        raise NotFound("User not found")


@csrf_exempt
@require_http_methods(["PATCH", "DELETE"])
@admin_required
def admin_user_detail(request, pk):
    user = _get_user(pk)
    if request.method == "DELETE":
        if user.pk == request.user.pk:
            raise ValidationFailure("Admins cannot delete their own account")
        user.delete()
        logger.info("Admin %s deleted user %s", request.user.pk, pk)
        return JsonResponse({"message": "User deleted successfully"})

    data = validated(RoleForm(json_body(request)))
    user.role = data["role"]
    user.save(update_fields=["role"])
    logger.info("Admin %s set role of user %s to %s", request.user.pk, pk, user.role)
    return JsonResponse({"message": "User updated successfully", "user": user.as_dict()})
