"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Order matters: import parent tables before child tables.
"""

from garage.models.part import Part
from garage.models.worker import Worker
from garage.models.service import Service
from garage.models.vehicle import Vehicle
from garage.models.vehicle_service import VehicleService, VehicleServiceStatus
from garage.models.vehicle_part import VehicleStandalonePart, VehicleServicePart
from garage.models.invoice import Invoice, InvoiceItem, InvoiceItemType
from garage.models.worker_payment import WorkerPayment

__all__ = [
    "Part",
    "Worker",
    "Service",
    "Vehicle",
    "VehicleService",
    "VehicleServiceStatus",
    "VehicleStandalonePart",
    "VehicleServicePart",
    "Invoice",
    "InvoiceItem",
    "InvoiceItemType",
    "WorkerPayment",
]
