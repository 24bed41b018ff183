import unittest

from garage.testing_db import DatabaseTestCase
from garage.models.service import Service
from garage.models.worker import Worker
from garage.models.worker_payment import WorkerPayment


class TestWorkerCrud(DatabaseTestCase):

    def test_create_and_update(self):
        worker = self.create_worker(name="Eric", email="")
        self.assertIsNone(worker["email"])

        res = self.client.put(f"/api/workers/{worker['id']}",
                              json={"name": "Eric N.", "job_title": "Electrician", "email": "eric@garage.rw"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["job_title"], "Electrician")
        self.assertEqual(res.json()["data"]["email"], "eric@garage.rw")

    def test_invalid_email(self):
        res = self.client.post("/api/workers", json={"name": "Eric", "email": "not-an-email"})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["error"]["field"], "email")

    def test_get_unknown_worker(self):
        self.assertEqual(self.client.get("/api/workers/999").status_code, 404)


class TestDeleteWorker(DatabaseTestCase):

    def test_delete_unassigns_services_and_drops_payments(self):
        worker = self.create_worker()
        service = self.create_service(worker_id=worker["id"])
        for amount in (100, 200):
            res = self.client.post(f"/api/workers/{worker['id']}/payments", json={"amount": amount})
            self.assertEqual(res.status_code, 201)

        res = self.client.delete(f"/api/workers/{worker['id']}")
        self.assertEqual(res.status_code, 200)

        self.assertIsNone(self.fetch(Service, service["id"]).worker_id)
        self.assertEqual(self.count(WorkerPayment), 0)
        self.assertEqual(self.count(Worker), 0)

        self.assertEqual(self.client.delete(f"/api/workers/{worker['id']}").status_code, 404)


class TestPayments(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.worker = self.create_worker(name="Jean Claude")
        self.url = f"/api/workers/{self.worker['id']}/payments"

    def test_default_payment_date(self):
        res = self.client.post(self.url, json={"amount": 12500, "method": "Cash"})
        self.assertEqual(res.status_code, 201)
        data = res.json()["data"]
        self.assertEqual(data["amount"], 12500)
        self.assertEqual(data["method"], "Cash")
        self.assertIsNotNone(data["payment_date"])

    def test_unparseable_date_falls_back_to_now(self):
        for raw in ("last tuesday", "March 5, 2024"):
            res = self.client.post(self.url, json={"amount": 10, "payment_date": raw})
            self.assertEqual(res.status_code, 201)
            paid_at = res.json()["data"]["payment_date"]
            self.assertIsNotNone(paid_at)
            self.assertFalse(paid_at.startswith("2024-03-05"))

    def test_explicit_date(self):
        res = self.client.post(self.url, json={"amount": 10, "payment_date": "2024-01-05"})
        self.assertEqual(res.status_code, 201)
        self.assertTrue(res.json()["data"]["payment_date"].startswith("2024-01-05"))

    def test_invalid_amounts(self):
        for amount in (0, -5, "abc", None):
            res = self.client.post(self.url, json={"amount": amount})
            self.assertEqual(res.status_code, 400, amount)
        self.assertEqual(self.client.post(self.url, json={}).status_code, 400)
        self.assertEqual(self.count(WorkerPayment), 0)

    def test_unknown_worker(self):
        self.assertEqual(self.client.post("/api/workers/999/payments", json={"amount": 5}).status_code, 404)
        self.assertEqual(self.client.get("/api/workers/999/payments").status_code, 404)
        self.assertEqual(self.client.get("/api/workers/999/payments/total").status_code, 404)

    def test_list_newest_first_with_total(self):
        self.client.post(self.url, json={"amount": 100, "payment_date": "2024-01-01"})
        self.client.post(self.url, json={"amount": 300, "payment_date": "2024-03-01"})
        self.client.post(self.url, json={"amount": 200, "payment_date": "2024-02-01"})

        data = self.client.get(self.url).json()["data"]
        self.assertEqual(data["worker"]["name"], "Jean Claude")
        self.assertEqual([p["amount"] for p in data["payments"]], [300, 200, 100])
        self.assertEqual(data["total"], 600)

    def test_total_paid(self):
        res = self.client.get(f"{self.url}/total")
        self.assertEqual(res.json()["data"], {"total_paid": 0})

        self.client.post(self.url, json={"amount": 1500.5})
        self.client.post(self.url, json={"amount": "499.5"})
        res = self.client.get(f"{self.url}/total")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["total_paid"], 2000)

    def test_payment_report_pdf(self):
        self.client.post(self.url, json={"amount": 12500, "method": "Mobile money", "notes": "March"})

        res = self.client.get(f"{self.url}/pdf")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.headers["content-type"], "application/pdf")
        self.assertEqual(res.headers["content-disposition"],
                         'attachment; filename="Jean_Claude_payments.pdf"')
        self.assertTrue(res.content.startswith(b"%PDF"))

    def test_payment_report_pdf_unknown_worker(self):
        self.assertEqual(self.client.get("/api/workers/999/payments/pdf").status_code, 404)


if __name__ == '__main__':
    unittest.main()
