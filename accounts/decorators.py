from functools import wraps

from pcbuilder.errors import AdminRequired, AuthRequired

from .tokens import user_for_token


def bearer_token(request):
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def token_required(view):
    """Authenticate the request from its ``Authorization: Bearer`` header.

    The resolved user replaces ``request.user``. A missing header raises
    ``AuthRequired``; a bad or expired token raises ``InvalidCredential``.
    """

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        token = bearer_token(request)
        if token is None:
            raise AuthRequired()
        request.user = user_for_token(token)
        return view(request, *args, **kwargs)

    return wrapper


def admin_required(view):
    @token_required
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_admin:
            raise AdminRequired()
        return view(request, *args, **kwargs)

    return wrapper
