import json

from django.contrib.auth import get_user_model
from django.test import Client, TestCase, override_settings
from django.urls import reverse

from pcbuilder.errors import InvalidCredential

from .tokens import issue_token, read_token


class AuthApiTests(TestCase):
    def setUp(self):
        self.client = Client()

    def _post(self, name, data, **extra):
        return self.client.post(
            reverse(name), data=json.dumps(data), content_type="application/json", **extra
        )

    def test_register_returns_token_and_hashes_password(self):
        resp = self._post(
            "register", {"name": "Ana", "email": "ana@example.com", "password": "secret12"}
        )
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["user"]["email"], "ana@example.com")
        self.assertEqual(data["user"]["role"], "user")
        self.assertNotIn("password", data["user"])

        user = get_user_model().objects.get(email="ana@example.com")
        self.assertNotEqual(user.password, "secret12")
        self.assertTrue(user.password.startswith("bcrypt_sha256$"))
        self.assertEqual(read_token(data["token"])["id"], user.pk)

    def test_register_duplicate_email(self):
        get_user_model().objects.create_user("ana@example.com", "secret12", name="Ana")
        resp = self._post(
            "register", {"name": "Other", "email": "ANA@example.com", "password": "secret12"}
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["message"], "User with this email already exists")

    def test_register_validation(self):
        resp = self._post("register", {"name": "", "email": "not-an-email", "password": "123"})
        self.assertEqual(resp.status_code, 400)
        errors = resp.json()["errors"]
        self.assertEqual(set(errors), {"name", "email", "password"})

    def test_login(self):
        get_user_model().objects.create_user("ana@example.com", "secret12", name="Ana")

        resp = self._post("login", {"email": "ana@example.com", "password": "secret12"})
        self.assertEqual(resp.status_code, 200)
        self.assertIn("token", resp.json())

        resp = self._post("login", {"email": "ana@example.com", "password": "wrong-one"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Invalid email or password")

    def test_me_and_profile(self):
        user = get_user_model().objects.create_user("ana@example.com", "secret12", name="Ana")
        auth = {"HTTP_AUTHORIZATION": f"Bearer {issue_token(user)}"}

        resp = self.client.get(reverse("me"), **auth)
        self.assertEqual(resp.json()["user"]["name"], "Ana")

        resp = self.client.patch(
            reverse("profile"),
            data=json.dumps({"name": "Ana Maria", "password": "newsecret"}),
            content_type="application/json",
            **auth,
        )
        self.assertEqual(resp.status_code, 200)
        user.refresh_from_db()
        self.assertEqual(user.name, "Ana Maria")
        self.assertTrue(user.check_password("newsecret"))

    def test_profile_email_must_be_unique(self):
        User = get_user_model()
        user = User.objects.create_user("ana@example.com", "secret12", name="Ana")
        User.objects.create_user("ben@example.com", "secret12", name="Ben")
        resp = self.client.put(
            reverse("profile"),
            data=json.dumps({"email": "ben@example.com"}),
            content_type="application/json",
            HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("email", resp.json()["errors"])


class SecurityTests(TestCase):
    def setUp(self):
        User = get_user_model()
        self.user = User.objects.create_user("ana@example.com", "secret12", name="Ana")
        self.admin = User.objects.create_superuser("root@example.com", "secret12", name="Root")
        self.client = Client()

    def test_missing_token_is_401(self):
        """Protected routes without an Authorization header answer 401."""
        resp = self.client.get(reverse("me"))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Authentication required")

    def test_tampered_token_is_403(self):
        token = issue_token(self.user)
        resp = self.client.get(reverse("me"), HTTP_AUTHORIZATION=f"Bearer {token}x")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Invalid or expired token")

    @override_settings(TOKEN_MAX_AGE_SECONDS=-1)
    def test_expired_token(self):
        with self.assertRaises(InvalidCredential):
            read_token(issue_token(self.user))

    def test_token_of_deactivated_user(self):
        token = issue_token(self.user)
        self.user.is_active = False
        self.user.save()
        resp = self.client.get(reverse("me"), HTTP_AUTHORIZATION=f"Bearer {token}")
        self.assertEqual(resp.status_code, 403)

    def test_admin_routes_require_admin_role(self):
        resp = self.client.get(
            reverse("admin_users"), HTTP_AUTHORIZATION=f"Bearer {issue_token(self.user)}"
        )
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Admin access required")

        resp = self.client.get(
            reverse("admin_users"), HTTP_AUTHORIZATION=f"Bearer {issue_token(self.admin)}"
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 2)

    def test_admin_changes_role_and_deletes_user(self):
        auth = {"HTTP_AUTHORIZATION": f"Bearer {issue_token(self.admin)}"}
        url = reverse("admin_user_detail", args=[self.user.pk])

        resp = self.client.patch(
            url, data=json.dumps({"role": "admin"}), content_type="application/json", **auth
        )
        self.assertEqual(resp.json()["user"]["role"], "admin")

        resp = self.client.patch(
            url, data=json.dumps({"role": "owner"}), content_type="application/json", **auth
        )
        self.assertEqual(resp.status_code, 400)

        resp = self.client.delete(url, **auth)
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(get_user_model().objects.filter(pk=self.user.pk).exists())

    def test_admin_cannot_delete_self(self):
        resp = self.client.delete(
            reverse("admin_user_detail", args=[self.admin.pk]),
            HTTP_AUTHORIZATION=f"Bearer {issue_token(self.admin)}",
        )
        self.assertEqual(resp.status_code, 400)

    def test_django_admin_site_requires_admin_role(self):
        resp = self.client.get("/admin/", follow=False)
        self.assertEqual(resp.status_code, 302)

        self.client.force_login(self.user)
        self.assertNotEqual(self.client.get("/admin/").status_code, 200)

        self.client.force_login(self.admin)
        self.assertEqual(self.client.get("/admin/").status_code, 200)
