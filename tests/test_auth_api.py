"""API tests for /auth: registration, login, and the current-identity endpoint."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from storefront.core.config import Settings, get_settings
from storefront.core.security import Role, get_token_service, verify_password
from storefront.models import Account

from helpers import API, ApiTestCase

ALICE = {"username": "alice", "email": "a@x.com", "password": "pw123", "role": "customer"}


class TestRegister(ApiTestCase):
    def test_register_success(self) -> None:
        resp = self.client.post(f"{API}/auth/register", json=ALICE)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["message"], "User registered successfully")

        account = self.db.query(Account).filter(Account.email == "a@x.com").one()
        self.assertEqual(account.username, "alice")
        self.assertEqual(account.role, Role.CUSTOMER)
        self.assertNotEqual(account.password_hash, "pw123")
        self.assertTrue(verify_password("pw123", account.password_hash))

    def test_role_defaults_to_customer(self) -> None:
        body = {k: v for k, v in ALICE.items() if k != "role"}
        resp = self.client.post(f"{API}/auth/register", json=body)
        self.assertEqual(resp.status_code, 201)
        account = self.db.query(Account).filter(Account.email == "a@x.com").one()
        self.assertEqual(account.role, Role.CUSTOMER)

    def test_duplicate_email_rejected(self) -> None:
        self.assertEqual(self.client.post(f"{API}/auth/register", json=ALICE).status_code, 201)
        again = dict(ALICE, username="alice2")
        resp = self.client.post(f"{API}/auth/register", json=again)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Email already registered")

    def test_duplicate_username_rejected(self) -> None:
        self.assertEqual(self.client.post(f"{API}/auth/register", json=ALICE).status_code, 201)
        again = dict(ALICE, email="other@x.com")
        resp = self.client.post(f"{API}/auth/register", json=again)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Username already taken")

    def test_email_case_does_not_make_a_new_account(self) -> None:
        self.assertEqual(self.client.post(f"{API}/auth/register", json=ALICE).status_code, 201)
        again = dict(ALICE, username="alice2", email="A@X.com")
        resp = self.client.post(f"{API}/auth/register", json=again)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Email already registered")
        self.assertEqual(self.db.query(Account).count(), 1)

    def test_email_stored_lower_case(self) -> None:
        resp = self.client.post(f"{API}/auth/register", json=dict(ALICE, email="Alice@X.com"))
        self.assertEqual(resp.status_code, 201)
        account = self.db.query(Account).one()
        self.assertEqual(account.email, "alice@x.com")

    def test_unique_constraint_race_is_400(self) -> None:
        self.assertEqual(self.client.post(f"{API}/auth/register", json=ALICE).status_code, 201)
        again = dict(ALICE, username="alice2")
        # Lookups miss (as with a concurrent insert); the unique index rejects the row.
        with patch("storefront.services.accounts.find_by_email", return_value=None):
            resp = self.client.post(f"{API}/auth/register", json=again)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Email or username already registered")
        self.assertEqual(self.db.query(Account).count(), 1)

    def test_malformed_email_rejected(self) -> None:
        resp = self.client.post(f"{API}/auth/register", json=dict(ALICE, email="not-an-email"))
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.db.query(Account).count(), 0)

    def test_unknown_role_rejected(self) -> None:
        resp = self.client.post(f"{API}/auth/register", json=dict(ALICE, role="superuser"))
        self.assertEqual(resp.status_code, 422)

    def test_admin_self_registration_refused_by_default(self) -> None:
        resp = self.client.post(f"{API}/auth/register", json=dict(ALICE, role="admin"))
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.db.query(Account).count(), 0)

    def test_admin_self_registration_when_enabled(self) -> None:
        enabled = get_settings().model_copy(update={"ALLOW_ADMIN_SELF_REGISTRATION": True})

        def _settings() -> Settings:
            return enabled

        self.client.app.dependency_overrides[get_settings] = _settings
        resp = self.client.post(f"{API}/auth/register", json=dict(ALICE, role="admin"))
        self.assertEqual(resp.status_code, 201)
        account = self.db.query(Account).filter(Account.email == "a@x.com").one()
        self.assertEqual(account.role, Role.ADMIN)


class TestLogin(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_account()

    def test_login_returns_token_and_account(self) -> None:
        resp = self.client.post(f"{API}/auth/login", json={"email": "a@x.com", "password": "pw123"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["token_type"], "bearer")
        self.assertEqual(
            data["user"],
            {"id": self.alice.id, "username": "alice", "email": "a@x.com", "role": "customer"},
        )
        self.assertNotIn("password_hash", data["user"])
        self.assertNotIn("profile_photo", data["user"])

        claims = get_token_service().verify(data["access_token"])
        self.assertEqual(claims.account_id, self.alice.id)
        self.assertEqual(claims.email, "a@x.com")
        self.assertEqual(claims.role, Role.CUSTOMER)

    def test_login_email_is_case_insensitive(self) -> None:
        resp = self.client.post(f"{API}/auth/login", json={"email": "A@X.COM", "password": "pw123"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["id"], self.alice.id)

    def test_wrong_password(self) -> None:
        resp = self.client.post(f"{API}/auth/login", json={"email": "a@x.com", "password": "nope"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Wrong password")
        self.assertNotIn("access_token", resp.json())

    def test_unknown_email(self) -> None:
        resp = self.client.post(f"{API}/auth/login", json={"email": "b@x.com", "password": "pw123"})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "User not found")

    def test_token_from_login_authenticates(self) -> None:
        login = self.client.post(f"{API}/auth/login", json={"email": "a@x.com", "password": "pw123"})
        token = login.json()["access_token"]
        resp = self.client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"id": self.alice.id, "email": "a@x.com", "role": "customer"})


class TestMe(ApiTestCase):
    def test_no_header_is_unauthenticated(self) -> None:
        resp = self.client.get(f"{API}/auth/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["detail"], "Not authenticated")
        self.assertEqual(resp.headers["www-authenticate"], "Bearer")

    def test_non_bearer_scheme_is_unauthenticated(self) -> None:
        resp = self.client.get(f"{API}/auth/me", headers={"Authorization": "Basic YTpi"})
        self.assertEqual(resp.status_code, 401)

    def test_garbage_token(self) -> None:
        resp = self.client.get(f"{API}/auth/me", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["detail"], "Malformed token")

    def test_expired_token(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=25)
        token = get_token_service().issue(1, "a@x.com", Role.CUSTOMER, issued_at=issued)
        resp = self.client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["detail"], "Token expired")

    def test_identity_comes_from_claims_alone(self) -> None:
        # No account row exists; a validly signed token is still trusted until expiry.
        token = get_token_service().issue(99, "ghost@x.com", Role.CUSTOMER)
        resp = self.client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["id"], 99)


if __name__ == "__main__":
    unittest.main()
