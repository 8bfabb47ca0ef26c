import asyncio
import time
import unittest
from unittest import mock

from cable_network_api.app.core import security
from cable_network_api.app.services.admin_service import AdminService
from cable_network_api.app.services.auth_service import AuthService

from tests.base import ApiTestCase


class TokenTests(unittest.TestCase):
    def test_fresh_token_decodes_to_claims(self):
        token = security.create_access_token({"id": 1, "username": "admin", "role": "admin"})
        claims = security.decode_access_token(token)
        self.assertEqual(claims["id"], 1)
        self.assertEqual(claims["username"], "admin")
        self.assertEqual(claims["role"], "admin")
        self.assertEqual(claims["exp"] - claims["iat"], 24 * 60 * 60)

    def test_token_expires_after_24_hours(self):
        issued_at = time.time()
        with mock.patch.object(security.time, "time", return_value=issued_at):
            token = security.create_access_token({"id": 1})
        with mock.patch.object(security.time, "time", return_value=issued_at + 23 * 3600):
            self.assertIsNotNone(security.decode_access_token(token))
        with mock.patch.object(security.time, "time", return_value=issued_at + 25 * 3600):
            self.assertIsNone(security.decode_access_token(token))

    def test_tampered_token_is_rejected(self):
        token = security.create_access_token({"id": 1, "role": "admin"})
        header, payload, signature = token.split(".")
        forged = security.create_access_token({"id": 2, "role": "admin"}).split(".")[1]
        self.assertIsNone(security.decode_access_token(f"{header}.{forged}.{signature}"))
        self.assertIsNone(security.decode_access_token("not-a-token"))
        self.assertIsNone(security.decode_access_token("a.b.c"))

    def test_password_hashing(self):
        hashed = security.hash_password("admin123")
        self.assertNotIn("admin123", hashed)
        self.assertTrue(security.verify_password("admin123", hashed))
        self.assertFalse(security.verify_password("admin124", hashed))
        self.assertFalse(security.verify_password("admin123", "garbage"))


class AuthApiTests(ApiTestCase):
    def test_login_returns_token_and_profile(self):
        body = self.login()
        self.assertEqual(body["message"], "Login successful")
        self.assertEqual(body["user"]["username"], "admin")
        self.assertEqual(body["user"]["role"], "admin")
        self.assertIsNone(body["user"]["geojson"])
        self.assertNotIn("password", body["user"])
        claims = security.decode_access_token(body["token"])
        self.assertEqual(claims["id"], body["user"]["id"])

    def test_failed_logins_are_indistinguishable(self):
        wrong_password = self.client.post(
            "/api/auth/login", json={"username": "admin", "password": "nope"}
        )
        unknown_user = self.client.post(
            "/api/auth/login", json={"username": "ghost", "password": "admin123"}
        )
        self.assertEqual(wrong_password.status_code, 401)
        self.assertEqual(unknown_user.status_code, 401)
        self.assertEqual(wrong_password.json(), unknown_user.json())
        self.assertEqual(wrong_password.json(), {"message": "Invalid credentials"})

    def test_login_requires_both_fields(self):
        response = self.client.post("/api/auth/login", json={"username": "admin"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Username and password required"})

    def test_verify_accepts_fresh_token(self):
        response = self.client.get("/api/auth/verify", headers=self.auth_headers())
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Token is valid")
        self.assertEqual(body["user"]["username"], "admin")

    def test_verify_without_token(self):
        response = self.client.get("/api/auth/verify")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Access token required"})

    def test_verify_with_invalid_or_expired_token(self):
        expired = security.create_access_token({"id": 1}, expires_delta=-60)
        for token in (expired, "garbage.token.value"):
            response = self.client.get(
                "/api/auth/verify", headers={"Authorization": f"Bearer {token}"}
            )
            self.assertEqual(response.status_code, 403)
            self.assertEqual(response.json(), {"message": "Invalid or expired token"})

    def test_bootstrap_is_idempotent(self):
        # Startup already created the default admin.
        created = asyncio.run(AuthService.bootstrap())
        self.assertFalse(created)
        admin = asyncio.run(AdminService.get_by_username("admin"))
        self.assertEqual(admin["role"], "admin")
        self.assertNotEqual(admin["password"], "admin123")

    def test_health_is_public(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertIn("timestamp", response.json())


if __name__ == "__main__":
    unittest.main()
