from unittest import mock

import requests
from django.test import SimpleTestCase

from pcbuilder.errors import (
    AdminRequired,
    AuthRequired,
    Conflict,
    InvalidCredential,
    NotFound,
    PersistenceFailure,
    UpstreamUnavailable,
    ValidationFailure,
)

from .client import ApiClient


def response(status, body=None, url="http://api.test/api/x"):
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status
    resp.url = url
    resp.content = b"" if body is None else b"{}"
    if body is None:
        resp.json.side_effect = ValueError("no body")
    else:
        resp.json.return_value = body
    return resp


class ApiClientTests(SimpleTestCase):
    def setUp(self):
        self.http = mock.Mock(spec=requests.Session)
        self.client_api = ApiClient("http://api.test/api/", session=self.http)

    def test_login_stores_token_and_sends_it(self):
        self.http.request.return_value = response(
            200, {"token": "abc", "user": {"id": 1, "email": "ana@example.com"}}
        )
        user = self.client_api.login("ana@example.com", "secret12")
        self.assertEqual(user["id"], 1)
        self.assertEqual(self.client_api.token, "abc")

        self.http.request.return_value = response(200, [])
        self.client_api.list_builds()
        args, kwargs = self.http.request.call_args
        self.assertEqual(args, ("GET", "http://api.test/api/builds"))
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer abc")

    def test_authenticated_call_without_token(self):
        with self.assertRaises(AuthRequired):
            self.client_api.list_builds()
        self.http.request.assert_not_called()

    def test_create_build_payload(self):
        self.client_api.token = "abc"
        self.http.request.return_value = response(201, {"buildId": 7})
        build_id = self.client_api.create_build(
            None, "Rig", 489.49, [("cpu", 1), ("motherboard", 2)], description="d"
        )
        self.assertEqual(build_id, 7)
        payload = self.http.request.call_args.kwargs["json"]
        self.assertEqual(
            payload["components"], {"cpu": {"id": 1}, "motherboard": {"id": 2}}
        )
        self.assertEqual(payload["totalPrice"], 489.49)

    def test_status_codes_map_to_errors(self):
        self.client_api.token = "abc"
        cases = [
            (400, {"message": "Invalid", "errors": {"name": ["Required"]}}, ValidationFailure),
            (401, {"message": "Authentication required"}, AuthRequired),
            (403, {"message": "Invalid or expired token"}, InvalidCredential),
            (403, {"message": "Admin access required"}, AdminRequired),
            (404, {"message": "Build not found"}, NotFound),
            (409, {"message": "User with this email already exists"}, Conflict),
            (503, None, UpstreamUnavailable),
        ]
        for status, body, error in cases:
            with self.subTest(status=status, error=error.__name__):
                self.http.request.return_value = response(status, body)
                with self.assertRaises(error) as ctx:
                    self.client_api.list_builds()
                self.assertIs(type(ctx.exception), error)

    def test_validation_errors_keep_field_details(self):
        self.http.request.return_value = response(
            400, {"message": "Invalid", "errors": {"email": ["Enter a valid email address."]}}
        )
        with self.assertRaises(ValidationFailure) as ctx:
            self.client_api.register("Ana", "nope", "secret12")
        self.assertIn("email", ctx.exception.fields)

    def test_server_error_on_write_is_persistence_failure(self):
        self.client_api.token = "abc"
        self.http.request.return_value = response(500, {"message": "Build could not be saved"})
        with self.assertRaises(PersistenceFailure):
            self.client_api.create_build(None, "Rig", 10, [("cpu", 1)])

    def test_unreachable_server(self):
        self.http.request.side_effect = requests.ConnectionError("refused")
        with self.assertLogs("builder.client", level="WARNING"):
            with self.assertRaises(UpstreamUnavailable):
                self.client_api.list_components("cpu")

    def test_timeout(self):
        self.http.request.side_effect = requests.Timeout("slow")
        with self.assertLogs("builder.client", level="WARNING"):
            with self.assertRaises(UpstreamUnavailable):
                self.client_api.get_component("cpu", 1)

    @mock.patch.dict("os.environ", {"PCBUILDER_API_URL": "http://env.test/api"})
    def test_base_url_from_environment(self):
        api = ApiClient(session=self.http)
        self.assertEqual(api.base_url, "http://env.test/api")
