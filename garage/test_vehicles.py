import unittest

from garage.testing_db import DatabaseTestCase
from garage.models.invoice import Invoice, InvoiceItem
from garage.models.vehicle import Vehicle
from garage.models.vehicle_part import VehicleStandalonePart, VehicleServicePart
from garage.models.vehicle_service import VehicleService


class TestCreateVehicle(DatabaseTestCase):

    def test_create_with_services_and_parts(self):
        oil = self.create_service(name="Oil change")
        brakes = self.create_service(name="Brakes")
        filter_part = self.create_part(name="Oil filter")
        pad = self.create_part(name="Brake pad")

        vehicle = self.create_vehicle(
            plate="rab 123c",
            service_ids=[oil["id"], brakes["id"]],
            standalone_parts=[{"part_id": filter_part["id"], "quantity": 2}],
            service_parts=[{"service_id": brakes["id"], "part_id": pad["id"], "quantity": 4}],
        )

        self.assertEqual(vehicle["plate"], "RAB 123C")
        self.assertIsNotNone(vehicle["entry_time"])
        self.assertIsNone(vehicle["exit_time"])
        self.assertEqual(self.count(VehicleService, VehicleService.vehicle_id == vehicle["id"],
                                    VehicleService.status == "pending"), 2)
        self.assertEqual(self.count(VehicleStandalonePart), 1)
        self.assertEqual(self.count(VehicleServicePart), 1)

    def test_missing_plate_is_rejected(self):
        res = self.client.post("/api/vehicles", json={"owner": "Alice", "contact_number": "0788"})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["error"]["field"], "plate")

        res = self.client.post("/api/vehicles", json={"plate": "  ", "owner": "Alice", "contact_number": "0788"})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(self.count(Vehicle), 0)

    def test_unknown_service_rolls_back_vehicle(self):
        res = self.client.post("/api/vehicles", json={
            "plate": "RAB123C", "owner": "Alice", "contact_number": "0788", "service_ids": [999],
        })
        self.assertEqual(res.status_code, 409)
        self.assertEqual(self.count(Vehicle), 0)


class TestUpdateVehicle(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.vehicle = self.create_vehicle()
        self.first = self.create_part(name="Air filter")
        self.second = self.create_part(name="Spark plug")

    def _update(self, **overrides):
        body = {"plate": "RAB123C", "owner": "Alice", "contact_number": "0788111222"}
        body.update(overrides)
        return self.client.put(f"/api/vehicles/{self.vehicle['id']}", json=body)

    def test_parts_are_replaced_not_merged(self):
        res = self._update(standalone_parts=[{"part_id": self.first["id"], "quantity": 1}])
        self.assertEqual(res.status_code, 200)
        res = self._update(owner="Bob", standalone_parts=[{"part_id": self.second["id"], "quantity": 3}])
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["owner"], "Bob")

        parts = self.client.get(f"/api/vehicles/{self.vehicle['id']}").json()["data"]["standalone_parts"]
        self.assertEqual([(p["id"], p["quantity"]) for p in parts], [(self.second["id"], 3)])

    def test_omitted_lists_clear_parts(self):
        self._update(standalone_parts=[{"part_id": self.first["id"], "quantity": 1}])
        self._update()
        self.assertEqual(self.count(VehicleStandalonePart), 0)

    def test_unknown_vehicle(self):
        res = self.client.put("/api/vehicles/999",
                              json={"plate": "X1", "owner": "Alice", "contact_number": "0788"})
        self.assertEqual(res.status_code, 404)


class TestExitVehicle(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        self.service = self.create_service()
        self.vehicle = self.create_vehicle(service_ids=[self.service["id"]])
        self.exit_url = f"/api/vehicles/{self.vehicle['id']}/exit"
        self.status_url = f"/api/vehicles/{self.vehicle['id']}/services/{self.service['id']}"

    def test_exit_requires_completed_services_then_invoice(self):
        res = self.client.put(self.exit_url)
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "All services must be completed before exiting.")
        self.assertIsNone(self.fetch(Vehicle, self.vehicle["id"]).exit_time)

        self.assertEqual(self.client.put(self.status_url, json={"status": "completed"}).status_code, 200)
        res = self.client.put(self.exit_url)
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Invoice must be generated before exiting.")
        self.assertIsNone(self.fetch(Vehicle, self.vehicle["id"]).exit_time)

        self.create_invoice(self.vehicle["id"])
        res = self.client.put(self.exit_url)
        self.assertEqual(res.status_code, 200)
        self.assertIsNotNone(self.fetch(Vehicle, self.vehicle["id"]).exit_time)

        res = self.client.put(self.exit_url)
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["error"]["code"], "VEHICLE_ALREADY_EXITED")

    def test_in_progress_still_blocks_exit(self):
        self.client.put(self.status_url, json={"status": "in_progress"})
        self.create_invoice(self.vehicle["id"])
        self.assertEqual(self.client.put(self.exit_url).status_code, 400)
        self.assertIsNone(self.fetch(Vehicle, self.vehicle["id"]).exit_time)

    def test_exit_unknown_vehicle(self):
        self.assertEqual(self.client.put("/api/vehicles/999/exit").status_code, 404)


class TestServiceStatus(DatabaseTestCase):

    def test_status_and_completed_time(self):
        service = self.create_service()
        vehicle = self.create_vehicle(service_ids=[service["id"]])

        res = self.client.put(f"/api/vehicles/{vehicle['id']}/services/{service['id']}",
                              json={"status": "Completed", "completed_time": "2024-03-01T10:30:00"})
        self.assertEqual(res.status_code, 200)

        entry = self.client.get(f"/api/vehicles/{vehicle['id']}").json()["data"]["services"][0]
        self.assertEqual(entry["status"], "completed")
        self.assertTrue(entry["completed_time"].startswith("2024-03-01T10:30:00"))

    def test_missing_service_record(self):
        vehicle = self.create_vehicle()
        res = self.client.put(f"/api/vehicles/{vehicle['id']}/services/42", json={"status": "completed"})
        self.assertEqual(res.status_code, 404)

    def test_status_required(self):
        service = self.create_service()
        vehicle = self.create_vehicle(service_ids=[service["id"]])
        res = self.client.put(f"/api/vehicles/{vehicle['id']}/services/{service['id']}", json={})
        self.assertEqual(res.status_code, 400)


class TestDeleteVehicle(DatabaseTestCase):

    def test_delete_cascades_everything(self):
        service = self.create_service()
        part = self.create_part()
        vehicle = self.create_vehicle(
            service_ids=[service["id"]],
            standalone_parts=[{"part_id": part["id"], "quantity": 1}],
            service_parts=[{"service_id": service["id"], "part_id": part["id"], "quantity": 2}],
        )
        other = self.create_vehicle(plate="RAC999Z")
        self.create_invoice(vehicle["id"], parts=[{"id": part["id"], "quantity": 1}])
        self.create_invoice(vehicle["id"])
        kept_invoice = self.create_invoice(other["id"], parts=[{"id": part["id"], "quantity": 1}])

        res = self.client.delete(f"/api/vehicles/{vehicle['id']}")
        self.assertEqual(res.status_code, 200)

        self.assertIsNone(self.fetch(Vehicle, vehicle["id"]))
        self.assertEqual(self.count(VehicleService), 0)
        self.assertEqual(self.count(VehicleStandalonePart), 0)
        self.assertEqual(self.count(VehicleServicePart), 0)
        self.assertEqual(self.count(Invoice), 1)
        self.assertEqual(self.count(InvoiceItem, InvoiceItem.invoice_id != kept_invoice), 0)
        self.assertEqual(self.count(InvoiceItem), 1)

    def test_delete_unknown_vehicle(self):
        self.assertEqual(self.client.delete("/api/vehicles/999").status_code, 404)


class TestVehicleReads(DatabaseTestCase):

    def test_detail_groups_service_parts(self):
        worker = self.create_worker(name="Eric")
        service = self.create_service(worker_id=worker["id"])
        pad = self.create_part(name="Brake pad")
        vehicle = self.create_vehicle(
            service_ids=[service["id"]],
            service_parts=[{"service_id": service["id"], "part_id": pad["id"], "quantity": 2}],
        )

        data = self.client.get(f"/api/vehicles/{vehicle['id']}").json()["data"]
        self.assertIsNone(data["invoice"])
        self.assertEqual(data["services"][0]["worker_name"], "Eric")
        self.assertEqual(data["services"][0]["parts"][0]["name"], "Brake pad")
        self.assertEqual(data["services"][0]["parts"][0]["quantity"], 2)

        invoice_id = self.create_invoice(vehicle["id"])
        data = self.client.get(f"/api/vehicles/{vehicle['id']}").json()["data"]
        self.assertEqual(data["invoice"]["id"], invoice_id)

    def test_get_unknown_vehicle(self):
        self.assertEqual(self.client.get("/api/vehicles/999").status_code, 404)

    def test_list_and_vehicle_ids(self):
        first = self.create_vehicle(plate="AAA111", owner="Alice")
        second = self.create_vehicle(plate="BBB222", owner="Bob")

        ids = self.client.get("/api/vehicle-ids").json()["data"]
        self.assertEqual(ids, [
            {"id": second["id"], "plate": "BBB222", "owner": "Bob"},
            {"id": first["id"], "plate": "AAA111", "owner": "Alice"},
        ])

        listed = self.client.get("/api/vehicles").json()["data"]
        self.assertEqual({v["id"] for v in listed}, {first["id"], second["id"]})
        self.assertEqual(listed[0]["services"], [])


if __name__ == '__main__':
    unittest.main()
