import unittest
from decimal import Decimal
from unittest import mock

from garage.testing_db import DatabaseTestCase
from garage.models.invoice import Invoice, InvoiceItem


class TestCreateInvoice(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.vehicle = self.create_vehicle()
        self.service = self.create_service(name="Oil change")
        self.part = self.create_part(name="Brake pad", selling_cost=1000, purchasing_cost=600)

    def test_worked_example_totals(self):
        invoice_id = self.create_invoice(
            self.vehicle["id"],
            days_in_garage=2,
            services=[{"id": self.service["id"], "description": "Oil change", "unit_price": 3000}],
            parts=[{"id": self.part["id"], "quantity": 2}],
        )

        res = self.client.get(f"/api/invoices/{invoice_id}")
        self.assertEqual(res.status_code, 200)
        inv = res.json()["data"]["invoice"]
        self.assertEqual(inv["garage_stay_rate"], 5000)
        self.assertEqual(inv["subtotal"], 15000)
        self.assertEqual(inv["tax"], 2700)
        self.assertEqual(inv["total"], 17700)
        self.assertEqual(inv["plate"], "RAB123C")

    def test_items_are_kept_in_insertion_order(self):
        invoice_id = self.create_invoice(
            self.vehicle["id"],
            days_in_garage=0,
            services=[{"id": self.service["id"], "description": "Oil change", "unit_price": 3000}],
            parts=[{"id": self.part["id"], "quantity": 3}],
        )
        items = self.client.get(f"/api/invoices/{invoice_id}").json()["data"]["items"]

        self.assertEqual([i["item_type"] for i in items], ["service", "part"])
        service_line, part_line = items
        self.assertEqual(service_line["quantity"], 1)
        self.assertEqual(service_line["total"], 3000)
        self.assertIsNone(service_line["purchased_cost"])
        self.assertEqual(part_line["unit_price"], 1000)
        self.assertEqual(part_line["total"], 3000)
        self.assertEqual(part_line["purchased_cost"], 600)
        self.assertEqual(part_line["description"], "Brake pad")

    def test_subtotal_matches_items_plus_stay(self):
        invoice_id = self.create_invoice(
            self.vehicle["id"],
            days_in_garage=3,
            services=[{"id": self.service["id"], "description": "Diag", "unit_price": 1234}],
            parts=[{"id": self.part["id"], "quantity": 1}],
        )
        with self.Session() as db:
            inv = db.get(Invoice, invoice_id)
            items_total = sum(i.total for i in inv.items)
            self.assertEqual(inv.subtotal, items_total + inv.days_in_garage * inv.garage_stay_rate)
            self.assertEqual(inv.tax, round(inv.subtotal * Decimal("0.18")))
            self.assertEqual(inv.total, inv.subtotal + inv.tax)

    def test_unknown_part_rolls_back_everything(self):
        res = self.client.post("/api/invoices", json={
            "vehicle_id": self.vehicle["id"],
            "days_in_garage": 1,
            "services": [{"id": self.service["id"], "description": "Oil change", "unit_price": 3000}],
            "parts": [{"id": self.part["id"], "quantity": 1}, {"id": 9999, "quantity": 1}],
        })
        self.assertEqual(res.status_code, 404)
        self.assertEqual(self.count(Invoice), 0)
        self.assertEqual(self.count(InvoiceItem), 0)

    def test_unknown_vehicle(self):
        res = self.client.post("/api/invoices", json={"vehicle_id": 9999, "days_in_garage": 1})
        self.assertEqual(res.status_code, 404)
        self.assertEqual(self.count(Invoice), 0)

    def test_missing_required_fields(self):
        res = self.client.post("/api/invoices", json={"vehicle_id": self.vehicle["id"]})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(res.json()["error"]["field"], "days_in_garage")

        res = self.client.post("/api/invoices", json={"days_in_garage": 2})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(self.count(Invoice), 0)


class TestInvoiceReadsAndDelete(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.vehicle = self.create_vehicle()
        self.service = self.create_service()

    def _invoice(self):
        return self.create_invoice(
            self.vehicle["id"],
            services=[{"id": self.service["id"], "description": "Oil change", "unit_price": 3000}],
        )

    def test_list_newest_first(self):
        first, second = self._invoice(), self._invoice()
        data = self.client.get("/api/invoices").json()["data"]
        self.assertEqual([i["id"] for i in data], [second, first])
        self.assertEqual(data[0]["owner"], "Alice")

    def test_get_missing_invoice(self):
        self.assertEqual(self.client.get("/api/invoices/404").status_code, 404)

    def test_delete_removes_items(self):
        invoice_id = self._invoice()
        res = self.client.delete(f"/api/invoices/{invoice_id}")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(self.count(Invoice), 0)
        self.assertEqual(self.count(InvoiceItem), 0)
        self.assertEqual(self.client.delete(f"/api/invoices/{invoice_id}").status_code, 404)


class TestInvoicePdf(DatabaseTestCase):

    def test_pdf_download(self):
        vehicle = self.create_vehicle(vin="JT123456789")
        service = self.create_service()
        part = self.create_part()
        invoice_id = self.create_invoice(
            vehicle["id"],
            days_in_garage=2,
            services=[{"id": service["id"], "description": "Oil change \u2013 full", "unit_price": 3000}],
            parts=[{"id": part["id"], "quantity": 2}],
        )

        res = self.client.get(f"/api/invoices/{invoice_id}/pdf")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.headers["content-type"], "application/pdf")
        self.assertEqual(res.headers["content-disposition"],
                         f'attachment; filename="invoice_{invoice_id}.pdf"')
        self.assertTrue(res.content.startswith(b"%PDF"))

    def test_pdf_totals_derive_from_stored_subtotal(self):
        vehicle = self.create_vehicle()
        service = self.create_service()
        invoice_id = self.create_invoice(
            vehicle["id"],
            days_in_garage=2,
            services=[{"id": service["id"], "description": "Diag", "unit_price": 3000}],
        )
        # Stale tax/total columns must not reach the document
        with self.Session() as db:
            db.query(Invoice).filter(Invoice.id == invoice_id).update({Invoice.tax: 1, Invoice.total: 2})
            db.commit()

        with mock.patch("garage.services.invoice_service.render_invoice_pdf",
                        return_value=b"%PDF-1.4 stub") as render:
            res = self.client.get(f"/api/invoices/{invoice_id}/pdf")

        self.assertEqual(res.status_code, 200)
        kwargs = render.call_args.kwargs
        self.assertEqual(kwargs["garage_stay"], Decimal("10000"))
        self.assertEqual(kwargs["subtotal"], Decimal("13000"))
        self.assertEqual(kwargs["tax"], Decimal("2340"))
        self.assertEqual(kwargs["total"], Decimal("15340"))
        self.assertEqual(kwargs["tax"], round(kwargs["subtotal"] * Decimal("0.18")))
        self.assertEqual(kwargs["total"], kwargs["subtotal"] + kwargs["tax"])

    def test_pdf_missing_invoice(self):
        res = self.client.get("/api/invoices/12/pdf")
        self.assertEqual(res.status_code, 404)


if __name__ == '__main__':
    unittest.main()
