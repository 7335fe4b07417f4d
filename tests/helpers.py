"""Shared base class for API tests: fresh schema per test, TestClient, account/token helpers."""

import unittest

from fastapi.testclient import TestClient

from storefront.core.database import SessionLocal, engine
from storefront.core.security import Role, get_token_service
from storefront.main import app
from storefront.models import Account, Base
from storefront.services import accounts

API = "/api/v1"


class ApiTestCase(unittest.TestCase):
    """Creates all tables before each test and drops them after."""

    def setUp(self) -> None:
        Base.metadata.create_all(bind=engine)
        self.client = TestClient(app)
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)

    def make_account(
        self,
        username: str = "alice",
        email: str = "a@x.com",
        password: str = "pw123",
        role: Role = Role.CUSTOMER,
    ) -> Account:
        return accounts.create_account(
            self.db, username=username, email=email, password=password, role=role
        )

    def make_admin(self) -> Account:
        return self.make_account(
            username="root", email="root@x.com", password="rootpw", role=Role.ADMIN
        )

    def auth_headers(self, account: Account) -> dict[str, str]:
        token = get_token_service().issue(account.id, account.email, account.role)
        return {"Authorization": f"Bearer {token}"}

    def reload(self, account_id: int) -> Account | None:
        """Read the account through a fresh session (sees changes made by requests)."""
        db = SessionLocal()
        try:
            return db.get(Account, account_id)
        finally:
            db.close()
