"""Bearer tokens for the JSON API.

A token is a signed, timestamped payload (``django.core.signing``) holding
the user's id and role. It expires after ``TOKEN_MAX_AGE_SECONDS``.
"""

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing

from pcbuilder.errors import InvalidCredential

TOKEN_SALT = "accounts.tokens"


def issue_token(user):
    payload = {"id": user.pk, "email": user.email, "role": user.role}
    return signing.dumps(payload, salt=TOKEN_SALT, compress=True)


def read_token(token):
    try:
        payload = signing.loads(
            token, salt=TOKEN_SALT, max_age=settings.TOKEN_MAX_AGE_SECONDS
        )
    except signing.BadSignature:
        raise InvalidCredential()
    return payload


def user_for_token(token):
    payload = read_token(token)
    User = get_user_model()
    try:
        user = User.objects.get(pk=payload.get("id"), is_active=True)
    except User.DoesNotExist:
        raise InvalidCredential()
    return user
