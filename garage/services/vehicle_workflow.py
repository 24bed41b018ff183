import logging
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from garage.database import unit_of_work
from garage.models.invoice import Invoice, InvoiceItem
from garage.models.part import Part
from garage.models.vehicle import Vehicle
from garage.models.vehicle_part import VehicleStandalonePart, VehicleServicePart
from garage.models.vehicle_service import VehicleService, VehicleServiceStatus
from garage.schemas.vehicle import (
    VehicleCreateRequest, VehicleUpdateRequest, ServiceStatusRequest,
    StandalonePartLine, ServicePartLine,
)
from garage.utils.exceptions import (
    NotFoundException,
    ServicesIncompleteException,
    InvoiceMissingException,
    VehicleAlreadyExitedException,
)

logger = logging.getLogger(__name__)

VEHICLE_FIELDS = ("plate", "make", "model_name", "year", "vin", "owner", "contact_number")


def _iso(value):
    return value.isoformat() if value else None


def _serialize(v: Vehicle) -> dict:
    return {
        "id":             v.id,
        "plate":          v.plate,
        "make":           v.make,
        "model_name":     v.model_name,
        "year":           v.year,
        "vin":            v.vin,
        "owner":          v.owner,
        "contact_number": v.contact_number,
        "entry_time":     _iso(v.entry_time),
        "exit_time":      _iso(v.exit_time),
    }


def _serialize_part_line(part: Part, quantity: int) -> dict:
    return {
        "id":                part.id,
        "name":              part.name,
        "part_number":       part.part_number,
        "quantity":          quantity,
        "purchasing_cost":   float(part.purchasing_cost),
        "selling_cost":      float(part.selling_cost),
        "quantity_in_stock": part.quantity_in_stock,
    }


def _serialize_service_entry(vs: VehicleService) -> dict:
    worker = vs.service.worker
    return {
        "id":             vs.service.id,
        "name":           vs.service.name,
        "status":         vs.status,
        "completed_time": _iso(vs.completed_time),
        "worker_id":      vs.service.worker_id,
        "worker_name":    worker.name if worker else None,
    }


def _serialize_invoice_summary(inv: Invoice) -> dict:
    return {
        "id":               inv.id,
        "vehicle_id":       inv.vehicle_id,
        "days_in_garage":   inv.days_in_garage,
        "garage_stay_rate": float(inv.garage_stay_rate),
        "subtotal":         float(inv.subtotal),
        "tax":              float(inv.tax),
        "total":            float(inv.total),
        "created_at":       _iso(inv.created_at),
    }


class VehicleWorkflow:
    """A vehicle's stay in the garage, from entry to exit."""

    def _find(self, db: Session, vehicle_id: int) -> Vehicle:
        v = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
        if not v:
            raise NotFoundException("Vehicle")
        return v

    def _add_parts(
        self, db: Session, vehicle_id: int,
        standalone_parts: list[StandalonePartLine], service_parts: list[ServicePartLine],
    ) -> None:
        for line in standalone_parts:
            db.add(VehicleStandalonePart(vehicle_id=vehicle_id, part_id=line.part_id,
                                         quantity=line.quantity))
        for line in service_parts:
            db.add(VehicleServicePart(vehicle_id=vehicle_id, service_id=line.service_id,
                                      part_id=line.part_id, quantity=line.quantity))

    # ─── Reads ────────────────────────────────────────────────────────────────
    def list_vehicles(self, db: Session) -> list[dict]:
        vehicles = db.query(Vehicle).order_by(Vehicle.entry_time.desc(), Vehicle.id.desc()).all()
        result = []
        for v in vehicles:
            data = _serialize(v)
            data["services"] = [_serialize_service_entry(vs) for vs in v.services]
            result.append(data)
        return result

    def get_vehicle(self, db: Session, vehicle_id: int) -> dict:
        v = self._find(db, vehicle_id)

        parts_by_service: dict[int, list[dict]] = {}
        for sp in v.service_parts:
            parts_by_service.setdefault(sp.service_id, []).append(
                _serialize_part_line(sp.part, sp.quantity))

        services = []
        for vs in v.services:
            entry = _serialize_service_entry(vs)
            entry["parts"] = parts_by_service.get(vs.service_id, [])
            services.append(entry)

        data = _serialize(v)
        data["services"] = services
        data["standalone_parts"] = [_serialize_part_line(p.part, p.quantity) for p in v.standalone_parts]
        data["invoice"] = _serialize_invoice_summary(v.invoices[-1]) if v.invoices else None
        return data

    def list_vehicle_ids(self, db: Session) -> list[dict]:
        rows = db.query(Vehicle.id, Vehicle.plate, Vehicle.owner).order_by(Vehicle.id.desc()).all()
        return [{"id": r.id, "plate": r.plate, "owner": r.owner} for r in rows]

    # ─── Writes ───────────────────────────────────────────────────────────────
    def create_vehicle(self, db: Session, data: VehicleCreateRequest) -> dict:
        vehicle = Vehicle(**data.model_dump(include=set(VEHICLE_FIELDS)))
        with unit_of_work(db):
            db.add(vehicle)
            db.flush()
            for service_id in data.service_ids:
                db.add(VehicleService(vehicle_id=vehicle.id, service_id=service_id,
                                      status=VehicleServiceStatus.PENDING))
            self._add_parts(db, vehicle.id, data.standalone_parts, data.service_parts)
        db.refresh(vehicle)
        logger.info(f"Vehicle #{vehicle.id} ({vehicle.plate}) entered the garage")
        return _serialize(vehicle)

    def update_vehicle(self, db: Session, vehicle_id: int, data: VehicleUpdateRequest) -> dict:
        with unit_of_work(db):
            v = self._find(db, vehicle_id)
            for field in VEHICLE_FIELDS:
                setattr(v, field, getattr(data, field))

            # Full replace of part associations
            db.query(VehicleStandalonePart).filter(VehicleStandalonePart.vehicle_id == vehicle_id)\
              .delete(synchronize_session=False)
            db.query(VehicleServicePart).filter(VehicleServicePart.vehicle_id == vehicle_id)\
              .delete(synchronize_session=False)
            self._add_parts(db, vehicle_id, data.standalone_parts, data.service_parts)
        db.refresh(v)
        return _serialize(v)

    def exit_vehicle(self, db: Session, vehicle_id: int) -> None:
        v = self._find(db, vehicle_id)
        if v.exit_time is not None:
            raise VehicleAlreadyExitedException()

        open_services = db.query(func.count(VehicleService.id)).filter(
            VehicleService.vehicle_id == vehicle_id,
            VehicleService.status != VehicleServiceStatus.COMPLETED,
        ).scalar()
        if open_services:
            raise ServicesIncompleteException()

        invoices = db.query(func.count(Invoice.id)).filter(Invoice.vehicle_id == vehicle_id).scalar()
        if not invoices:
            raise InvoiceMissingException()

        with unit_of_work(db):
            v.exit_time = func.now()
        logger.info(f"Vehicle #{vehicle_id} exited the garage")

    def update_service_status(
        self, db: Session, vehicle_id: int, service_id: int, data: ServiceStatusRequest,
    ) -> None:
        with unit_of_work(db):
            updated = db.query(VehicleService).filter(
                VehicleService.vehicle_id == vehicle_id,
                VehicleService.service_id == service_id,
            ).update(
                {VehicleService.status: data.status, VehicleService.completed_time: data.completed_time},
                synchronize_session=False,
            )
        if not updated:
            raise NotFoundException("Service record")

    def delete_vehicle(self, db: Session, vehicle_id: int) -> None:
        """
        Cascade: invoice items -> invoices -> service/part links -> vehicle,
        as one transaction. The cascade deletes are no-ops for an unknown id.
        """
        with unit_of_work(db):
            invoice_ids = select(Invoice.id).where(Invoice.vehicle_id == vehicle_id)
            db.query(InvoiceItem).filter(InvoiceItem.invoice_id.in_(invoice_ids))\
              .delete(synchronize_session=False)
            db.query(Invoice).filter(Invoice.vehicle_id == vehicle_id).delete(synchronize_session=False)
            for link in (VehicleServicePart, VehicleStandalonePart, VehicleService):
                db.query(link).filter(link.vehicle_id == vehicle_id).delete(synchronize_session=False)
            deleted = db.query(Vehicle).filter(Vehicle.id == vehicle_id).delete(synchronize_session=False)
        if not deleted:
            raise NotFoundException("Vehicle")
        logger.info(f"Deleted vehicle #{vehicle_id} with its invoices")


vehicle_workflow = VehicleWorkflow()
