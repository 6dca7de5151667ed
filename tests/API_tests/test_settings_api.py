import os
import tempfile
import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app import app
from db.session import get_db
from models.base import Base
from models.user_settings import UserSettings

VALID = {
    "api_key": "abc123",
    "company_name": "Acme Trading",
    "trading_name": "Acme",
    "registration_number": "2019/123456/07",
    "address": "1 Main Road\nCape Town",
}


class TestSettingsAPI(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
        self._tmp.close()

        self.engine = create_engine(
            f"sqlite:///{self._tmp.name}",
            connect_args={"check_same_thread": False},
            future=True,
        )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False, future=True)
        Base.metadata.create_all(bind=self.engine)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)
        self.headers = {"X-User-Id": "user-1"}

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()
        try:
            self.engine.dispose()
        finally:
            if os.path.exists(self._tmp.name):
                os.unlink(self._tmp.name)

    def _stored_key(self, user_id: str = "user-1") -> str:
        with self.SessionLocal() as db:
            return db.query(UserSettings).filter(UserSettings.user_id == user_id).one().takealot_api_key

    def test_get_settings_before_save_is_404(self):
        r = self.client.get("/settings", headers=self.headers)
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json()["error"], "No settings saved yet")

    def test_missing_user_header_is_422(self):
        r = self.client.get("/settings")
        self.assertEqual(r.status_code, 422)

    def test_save_persists_prefixed_key_and_returns_bare_key(self):
        r = self.client.put("/settings", json=VALID, headers=self.headers)
        self.assertEqual(r.status_code, 200)

        data = r.json()["data"]
        self.assertEqual(data["api_key"], "abc123")
        self.assertEqual(data["user_id"], "user-1")
        self.assertEqual(self._stored_key(), "Key abc123")

    def test_save_with_prefixed_key_is_not_double_prefixed(self):
        r = self.client.put("/settings", json=dict(VALID, api_key="Key abc123"), headers=self.headers)
        self.assertEqual(r.status_code, 200)
        self.assertEqual(self._stored_key(), "Key abc123")

    def test_save_twice_updates_same_row(self):
        self.client.put("/settings", json=VALID, headers=self.headers)
        r = self.client.put("/settings", json=dict(VALID, company_name="Acme 2"), headers=self.headers)
        self.assertEqual(r.status_code, 200)

        with self.SessionLocal() as db:
            rows = db.query(UserSettings).all()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].company_name, "Acme 2")

        r2 = self.client.get("/settings", headers=self.headers)
        self.assertEqual(r2.json()["data"]["company_name"], "Acme 2")

    def test_incomplete_settings_rejected_with_field_errors(self):
        r = self.client.put(
            "/settings",
            json={"api_key": "abc", "company_name": "  "},
            headers=self.headers,
        )
        self.assertEqual(r.status_code, 422)

        body = r.json()
        self.assertEqual(body["errors"]["company_name"], "Company Name is required")
        self.assertIn("address", body["errors"])
        self.assertNotIn("api_key", body["errors"])

        # nothing persisted
        with self.SessionLocal() as db:
            self.assertEqual(db.query(UserSettings).count(), 0)

    def test_bare_prefix_counts_as_missing_key(self):
        r = self.client.put("/settings", json=dict(VALID, api_key="Key "), headers=self.headers)
        self.assertEqual(r.status_code, 422)
        self.assertIn("api_key", r.json()["errors"])

    def test_bare_prefix_word_counts_as_missing_key(self):
        r = self.client.put("/settings", json=dict(VALID, api_key="Key"), headers=self.headers)
        self.assertEqual(r.status_code, 422)
        self.assertIn("api_key", r.json()["errors"])

    def test_lowercase_prefix_is_stored_once(self):
        r = self.client.put("/settings", json=dict(VALID, api_key="key abc123"), headers=self.headers)
        self.assertEqual(r.status_code, 200)
        self.assertEqual(self._stored_key(), "Key abc123")

    def test_settings_are_per_user(self):
        self.client.put("/settings", json=VALID, headers=self.headers)
        r = self.client.get("/settings", headers={"X-User-Id": "someone-else"})
        self.assertEqual(r.status_code, 404)


if __name__ == "__main__":
    unittest.main()
