"""
Shared fixtures for the garage test suites.

Each test gets a fresh in-memory SQLite database wired into the FastAPI app
through `get_db`, plus helpers that create rows through the HTTP API.
"""
import os
import tempfile
import unittest

# Settings are read at import time, so the environment must be ready first
TEST_ROOT = tempfile.mkdtemp(prefix="garage-tests-")
os.environ.setdefault("DATABASE_URL", "sqlite://")
# Uploads always go to the scratch directory, never the working tree
os.environ["UPLOAD_ROOT"] = os.path.join(TEST_ROOT, "uploads")
os.environ["ASSETS_DIR"] = os.path.join(TEST_ROOT, "assets")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from garage.database import Base, get_db  # noqa: E402
from garage.main import app  # noqa: E402


class DatabaseTestCase(unittest.TestCase):

    def setUp(self):
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False,
                                    expire_on_commit=False)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    # ─── Direct DB access for assertions ──────────────────────────────────────
    def count(self, model, *criteria) -> int:
        with self.Session() as db:
            return db.query(model).filter(*criteria).count()

    def fetch(self, model, pk):
        with self.Session() as db:
            return db.get(model, pk)

    # ─── API helpers ──────────────────────────────────────────────────────────
    def _created(self, path: str, body: dict) -> dict:
        res = self.client.post(path, json=body)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["data"]

    def create_part(self, **overrides) -> dict:
        body = {
            "name": "Oil filter",
            "part_number": f"PN-{len(self.client.get('/api/parts').json()['data']) + 1}",
            "purchasing_cost": 600,
            "selling_cost": 1000,
            "quantity_in_stock": 10,
        }
        body.update(overrides)
        return self._created("/api/parts", body)

    def create_worker(self, **overrides) -> dict:
        body = {"name": "Jean Mechanic", "job_title": "Mechanic", "phone": "0788000000"}
        body.update(overrides)
        return self._created("/api/workers", body)

    def create_service(self, **overrides) -> dict:
        body = {"name": "Oil change", "category": "Maintenance"}
        body.update(overrides)
        return self._created("/api/services", body)

    def create_vehicle(self, **overrides) -> dict:
        body = {
            "plate": "RAB123C",
            "make": "Toyota",
            "model_name": "Corolla",
            "year": 2015,
            "owner": "Alice",
            "contact_number": "0788111222",
        }
        body.update(overrides)
        return self._created("/api/vehicles", body)

    def create_invoice(self, vehicle_id: int, **overrides) -> int:
        body = {"vehicle_id": vehicle_id, "days_in_garage": 1, "services": [], "parts": []}
        body.update(overrides)
        return self._created("/api/invoices", body)["invoice_id"]
