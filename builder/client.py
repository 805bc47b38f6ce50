import logging
import os

import requests

from pcbuilder.errors import (
    AdminRequired,
    AuthRequired,
    Conflict,
    InvalidCredential,
    NotFound,
    PCBuilderError,
    PersistenceFailure,
    UpstreamUnavailable,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000/api"

WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


class ApiClient:
    """HTTP client for the builder API.

    Also serves as a ``BuildSession`` backend: ``create_build`` posts the
    build with the client's bearer token.
    """

    def __init__(self, base_url=None, token=None, timeout=10, session=None):
        self.base_url = (
            base_url or os.environ.get("PCBUILDER_API_URL") or DEFAULT_API_URL
        ).rstrip("/")
        self.token = token
        self.timeout = timeout
        self.user = None
        self.http = session or requests.Session()

    # --- transport ---
    def _request(self, method, path, auth=False, **kwargs):
        headers = kwargs.pop("headers", {})
        if auth:
            if not self.token:
                raise AuthRequired()
            headers["Authorization"] = f"Bearer {self.token}"
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.http.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise UpstreamUnavailable(f"Could not reach {self.base_url}") from exc
        if resp.status_code >= 400:
            raise self._error_for(method, resp)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    def _error_for(self, method, resp):
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message")
        fields = body.get("errors")
        status = resp.status_code
        if status == 400:
            return ValidationFailure(message, fields=fields)
        if status == 401:
            return AuthRequired(message)
        if status == 403:
            if message == AdminRequired.default_message:
                return AdminRequired(message)
            return InvalidCredential(message)
        if status == 404:
            return NotFound(message)
        if status == 409:
            return Conflict(message)
        if status in (502, 503, 504):
            logger.warning("%s %s: upstream status %s", method, resp.url, status)
            return UpstreamUnavailable(message)
        if method in WRITE_METHODS:
            return PersistenceFailure(message)
        return PCBuilderError(message)

    # --- auth ---
    def _remember(self, data):
        self.token = data.get("token")
        self.user = data.get("user")
        return self.user

    def register(self, name, email, password):
        data = self._request(
            "POST", "auth/register", json={"name": name, "email": email, "password": password}
        )
        return self._remember(data)

    def login(self, email, password):
        data = self._request("POST", "auth/login", json={"email": email, "password": password})
        return self._remember(data)

    def me(self):
        return self._request("GET", "auth/me", auth=True)["user"]

    # --- catalog ---
    def list_components(self, category):
        return self._request("GET", f"components/{category}")

    def get_component(self, category, component_id):
        return self._request("GET", f"components/{category}/{component_id}")

    def evaluate(self, components):
        return self._request("POST", "builder/evaluate", json={"components": components})

    # --- builds ---
    def create_build(self, user, name, total_price, components, description=""):
        payload = {
            "name": name,
            "description": description,
            "totalPrice": float(total_price),
            "components": {category: {"id": cid} for category, cid in components},
        }
        data = self._request("POST", "builds", auth=True, json=payload)
        return data["buildId"]

    def list_builds(self):
        return self._request("GET", "builds", auth=True)

    def delete_build(self, build_id):
        self._request("DELETE", f"builds/{build_id}", auth=True)
