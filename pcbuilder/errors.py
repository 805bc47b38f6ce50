"""Error taxonomy shared by the catalog, accounts and builder apps.

Every error carries the HTTP status the API answers with, so views can
simply raise and let ``pcbuilder.middleware.ApiErrorMiddleware`` render it.
"""


class PCBuilderError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message=None, fields=None):
        self.message = message or self.default_message
        self.fields = fields or {}
        super().__init__(self.message)

    def as_dict(self):
        data = {"message": self.message}
        if self.fields:
            data["errors"] = self.fields
        return data


class ValidationFailure(PCBuilderError):
    status_code = 400
    default_message = "Invalid submission"


class Conflict(ValidationFailure):
    status_code = 409
    default_message = "Resource already exists"


class AuthRequired(PCBuilderError):
    status_code = 401
    default_message = "Authentication required"


class InvalidCredential(AuthRequired):
    status_code = 403
    default_message = "Invalid or expired token"


class AdminRequired(AuthRequired):
    status_code = 403
    default_message = "Admin access required"


class NotFound(PCBuilderError):
    status_code = 404
    default_message = "Not found"


class PersistenceFailure(PCBuilderError):
    status_code = 500
    default_message = "Could not save changes"


class UpstreamUnavailable(PCBuilderError):
    status_code = 503
    default_message = "Service unavailable"
