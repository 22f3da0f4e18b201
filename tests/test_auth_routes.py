import os
import tempfile
import unittest


class TestAuthRoutes(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)

        from feed_api import create_app
        from feed_api.db import db

        cls.app = create_app({
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{cls.db_path}",
            "JWT_SECRET_KEY": "auth-test-secret-key-0123456789abcdef",
            "LOG_LEVEL": "WARNING",
        })
        cls.db = db
        cls.client = cls.app.test_client()

    @classmethod
    def tearDownClass(cls):
        with cls.app.app_context():
            cls.db.engine.dispose()
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)

    def setUp(self):
        with self.app.app_context():
            self.db.drop_all()
            self.db.create_all()

    def _signup(self, email="alice@example.com", password="secret1", name="Alice"):
        return self.client.put(
            "/auth/signup",
            json={"email": email, "password": password, "name": name},
        )

    def _login(self, email="alice@example.com", password="secret1"):
        return self.client.post(
            "/auth/login",
            json={"email": email, "password": password},
        )

    def test_signup_and_login(self):
        signup_response = self._signup()
        self.assertEqual(signup_response.status_code, 201)
        user_id = signup_response.get_json()["userId"]

        login_response = self._login()
        self.assertEqual(login_response.status_code, 200)
        body = login_response.get_json()
        self.assertEqual(body["userId"], user_id)
        self.assertTrue(body["token"])

    def test_signup_rejects_duplicate_email(self):
        self._signup()
        response = self._signup(email="ALICE@example.com")

        self.assertEqual(response.status_code, 422)
        self.assertIn("email", response.get_json()["data"])

    def test_signup_rejects_invalid_fields(self):
        response = self._signup(email="not-an-email", password="123", name="  ")

        self.assertEqual(response.status_code, 422)
        errors = response.get_json()["data"]
        self.assertIn("email", errors)
        self.assertIn("password", errors)
        self.assertIn("name", errors)

    def test_signup_rejects_invalid_json(self):
        response = self.client.put(
            "/auth/signup",
            data="not-json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.get_json()["message"], "Invalid JSON body")

    def test_login_rejects_wrong_password(self):
        self._signup()
        response = self._login(password="wrong-password")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["message"], "Wrong password!")

    def test_login_rejects_unknown_email(self):
        response = self._login(email="nobody@example.com")
        self.assertEqual(response.status_code, 401)

    def test_status_read_and_update(self):
        self._signup()
        token = self._login().get_json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        initial = self.client.get("/auth/status", headers=headers)
        self.assertEqual(initial.status_code, 200)
        self.assertEqual(initial.get_json()["status"], "I am new!")

        updated = self.client.patch(
            "/auth/status",
            json={"status": "Writing posts"},
            headers=headers,
        )
        self.assertEqual(updated.status_code, 200)

        current = self.client.get("/auth/status", headers=headers)
        self.assertEqual(current.get_json()["status"], "Writing posts")

    def test_status_requires_auth(self):
        response = self.client.get("/auth/status")
        self.assertEqual(response.status_code, 401)

    def test_signed_token_without_user_id_is_unauthenticated(self):
        import time
        import uuid

        import jwt

        now = int(time.time())
        token = jwt.encode(
            {
                "email": "alice@example.com",
                "iat": now,
                "nbf": now,
                "exp": now + 600,
                "type": "access",
                "fresh": False,
                "jti": str(uuid.uuid4()),
            },
            self.app.config["JWT_SECRET_KEY"],
            algorithm="HS256",
        )

        response = self.client.get(
            "/auth/status",
            headers={"Authorization": f"Bearer {token}"},
        )

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["message"], "Not authenticated.")


class TestTokenVerifier(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        from feed_api import create_app

        cls.app = create_app({
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "JWT_SECRET_KEY": "verifier-test-secret-key-0123456789ab",
            "LOG_LEVEL": "WARNING",
        })

    def _verify(self, header):
        from feed_api.services.token_service import verify_authorization_header

        with self.app.app_context():
            return verify_authorization_header(header)

    def test_missing_header(self):
        from feed_api.errors import Unauthenticated

        with self.assertRaises(Unauthenticated):
            self._verify(None)

    def test_header_without_bearer_prefix(self):
        from feed_api.errors import Unauthenticated

        with self.assertRaises(Unauthenticated):
            self._verify("Basic dXNlcjpwYXNz")
        with self.assertRaises(Unauthenticated):
            self._verify("Bearer ")

    def test_tampered_token_is_token_invalid(self):
        import jwt

        from feed_api.errors import TokenInvalid

        token = jwt.encode(
            {"userId": "7"},
            "some-other-secret-key-0123456789abcdef",
            algorithm="HS256",
        )

        with self.assertRaises(TokenInvalid) as ctx:
            self._verify(f"Bearer {token}")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_expired_token_is_token_invalid(self):
        from datetime import timedelta

        from feed_api.errors import TokenInvalid
        from flask_jwt_extended import create_access_token

        with self.app.app_context():
            token = create_access_token(identity="7", expires_delta=timedelta(seconds=-5))

        with self.assertRaises(TokenInvalid):
            self._verify(f"Bearer {token}")

    def test_valid_token_returns_user_id(self):
        from flask_jwt_extended import create_access_token

        with self.app.app_context():
            token = create_access_token(identity="7")

        self.assertEqual(self._verify(f"Bearer {token}"), "7")


if __name__ == "__main__":
    unittest.main()
