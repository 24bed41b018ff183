import logging
from sqlalchemy.orm import Session

from garage.config import settings
from garage.database import unit_of_work
from garage.models.invoice import Invoice, InvoiceItem, InvoiceItemType
from garage.models.part import Part
from garage.models.vehicle import Vehicle
from garage.schemas.invoice import InvoiceCreateRequest
from garage.utils.exceptions import NotFoundException
from garage.utils.pdf import render_invoice_pdf
from garage.utils.pricing import compute_totals, apply_tax, to_decimal

logger = logging.getLogger(__name__)


def _serialize(inv: Invoice) -> dict:
    return {
        "id":               inv.id,
        "vehicle_id":       inv.vehicle_id,
        "plate":            inv.vehicle.plate if inv.vehicle else None,
        "owner":            inv.vehicle.owner if inv.vehicle else None,
        "days_in_garage":   inv.days_in_garage,
        "garage_stay_rate": float(inv.garage_stay_rate),
        "subtotal":         float(inv.subtotal),
        "tax":              float(inv.tax),
        "total":            float(inv.total),
        "created_at":       inv.created_at.isoformat() if inv.created_at else None,
    }


def _serialize_item(it: InvoiceItem) -> dict:
    return {
        "id":             it.id,
        "invoice_id":     it.invoice_id,
        "item_type":      it.item_type.value,
        "item_id":        it.item_id,
        "description":    it.description,
        "quantity":       it.quantity,
        "purchased_cost": float(it.purchased_cost) if it.purchased_cost is not None else None,
        "unit_price":     float(it.unit_price),
        "total":          float(it.total),
    }


class InvoiceService:

    def _find(self, db: Session, invoice_id: int) -> Invoice:
        inv = db.query(Invoice).filter(Invoice.id == invoice_id).first()
        if not inv:
            raise NotFoundException("Invoice")
        return inv

    def list_invoices(self, db: Session) -> list[dict]:
        invoices = db.query(Invoice).join(Invoice.vehicle).order_by(Invoice.id.desc()).all()
        return [_serialize(i) for i in invoices]

    def get_invoice(self, db: Session, invoice_id: int) -> dict:
        inv = self._find(db, invoice_id)
        return {
            "invoice": _serialize(inv),
            "items":   [_serialize_item(it) for it in inv.items],
        }

    def create_invoice(self, db: Session, data: InvoiceCreateRequest) -> int:
        """
        Persist an invoice for the vehicle's selected services and parts.

        A zero-totals invoice row is inserted first to obtain its id, the
        line items are written against it, then the computed totals are
        stored. Everything happens in one transaction: an unknown vehicle
        or part id leaves no trace.
        """
        rate = to_decimal(settings.GARAGE_STAY_RATE)
        with unit_of_work(db):
            if not db.query(Vehicle.id).filter(Vehicle.id == data.vehicle_id).first():
                raise NotFoundException("Vehicle")

            invoice = Invoice(
                vehicle_id=data.vehicle_id,
                days_in_garage=data.days_in_garage,
                garage_stay_rate=rate,
                subtotal=0, tax=0, total=0,
            )
            db.add(invoice)
            db.flush()

            line_totals = []
            for svc in data.services:
                line_total = to_decimal(svc.unit_price)
                line_totals.append(line_total)
                db.add(InvoiceItem(
                    invoice_id=invoice.id,
                    item_type=InvoiceItemType.SERVICE,
                    item_id=svc.id,
                    description=svc.description,
                    quantity=1,
                    purchased_cost=None,
                    unit_price=line_total,
                    total=line_total,
                ))

            for line in data.parts:
                part = db.query(Part).filter(Part.id == line.id).first()
                if not part:
                    raise NotFoundException(f"Part id {line.id}")
                unit_price = to_decimal(part.selling_cost)
                line_total = unit_price * line.quantity
                line_totals.append(line_total)
                db.add(InvoiceItem(
                    invoice_id=invoice.id,
                    item_type=InvoiceItemType.PART,
                    item_id=part.id,
                    description=line.description or part.name,
                    quantity=line.quantity,
                    purchased_cost=part.purchasing_cost,
                    unit_price=unit_price,
                    total=line_total,
                ))

            totals = compute_totals(line_totals, data.days_in_garage, rate)
            invoice.subtotal = totals.subtotal
            invoice.tax = totals.tax
            invoice.total = totals.total

        logger.info(f"Invoice #{invoice.id} created for vehicle #{data.vehicle_id}: total={totals.total}")
        return invoice.id

    def delete_invoice(self, db: Session, invoice_id: int) -> None:
        with unit_of_work(db):
            db.query(InvoiceItem).filter(InvoiceItem.invoice_id == invoice_id)\
              .delete(synchronize_session=False)
            deleted = db.query(Invoice).filter(Invoice.id == invoice_id).delete(synchronize_session=False)
        if not deleted:
            raise NotFoundException("Invoice")
        logger.info(f"Deleted invoice #{invoice_id}")

    def invoice_pdf(self, db: Session, invoice_id: int) -> bytes:
        inv = self._find(db, invoice_id)
        vehicle = inv.vehicle

        # Display totals derive from the stored subtotal
        garage_stay = to_decimal(inv.garage_stay_rate) * (inv.days_in_garage or 0)
        tax, total = apply_tax(inv.subtotal)

        return render_invoice_pdf(
            invoice_id=inv.id,
            vehicle={
                "plate":          vehicle.plate if vehicle else None,
                "owner":          vehicle.owner if vehicle else None,
                "contact_number": vehicle.contact_number if vehicle else None,
                "model_name":     vehicle.model_name if vehicle else None,
                "make":           vehicle.make if vehicle else None,
                "year":           vehicle.year if vehicle else None,
                "vin":            vehicle.vin if vehicle else None,
            },
            days_in_garage=inv.days_in_garage,
            garage_stay_rate=inv.garage_stay_rate,
            items=[_serialize_item(it) for it in inv.items],
            garage_stay=garage_stay,
            subtotal=to_decimal(inv.subtotal),
            tax=tax,
            total=total,
        )


invoice_service = InvoiceService()
