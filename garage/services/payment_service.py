import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from garage.database import unit_of_work
from garage.models.worker_payment import WorkerPayment
from garage.schemas.payment import PaymentCreateRequest
from garage.services.worker_service import worker_service, serialize_worker
from garage.utils.pdf import render_payment_report_pdf

logger = logging.getLogger(__name__)


def _serialize(p: WorkerPayment) -> dict:
    return {
        "id":           p.id,
        "worker_id":    p.worker_id,
        "amount":       float(p.amount),
        "method":       p.method,
        "notes":        p.notes,
        "payment_date": p.payment_date.isoformat() if p.payment_date else None,
    }


def _payments(db: Session, worker_id: int) -> list[WorkerPayment]:
    # Newest first; undated payments last
    return db.query(WorkerPayment).filter(WorkerPayment.worker_id == worker_id)\
             .order_by(WorkerPayment.payment_date.desc().nulls_last(), WorkerPayment.id.desc()).all()


def list_payments(db: Session, worker_id: int) -> dict:
    worker = worker_service.find_worker(db, worker_id)
    payments = _payments(db, worker_id)
    return {
        "worker":   serialize_worker(worker),
        "payments": [_serialize(p) for p in payments],
        "total":    float(sum((p.amount for p in payments), 0)),
    }


def add_payment(db: Session, worker_id: int, data: PaymentCreateRequest) -> dict:
    worker_service.find_worker(db, worker_id)

    payment = WorkerPayment(worker_id=worker_id, amount=data.amount,
                            method=data.method, notes=data.notes)
    # Left unset, payment_date falls back to the database clock
    if data.payment_date is not None:
        payment.payment_date = data.payment_date

    with unit_of_work(db):
        db.add(payment)
    db.refresh(payment)
    logger.info(f"Recorded payment #{payment.id} of {payment.amount} for worker #{worker_id}")
    return _serialize(payment)


def total_paid(db: Session, worker_id: int) -> float:
    worker_service.find_worker(db, worker_id)
    total = db.query(func.coalesce(func.sum(WorkerPayment.amount), 0))\
              .filter(WorkerPayment.worker_id == worker_id).scalar()
    return float(total or 0)


def payment_report_pdf(db: Session, worker_id: int) -> tuple[str, bytes]:
    """Return (download filename, PDF bytes) for the worker's payment history."""
    worker = worker_service.find_worker(db, worker_id)
    payments = _payments(db, worker_id)
    total = sum((p.amount for p in payments), 0)

    content = render_payment_report_pdf(
        serialize_worker(worker),
        [{"payment_date": p.payment_date, "amount": p.amount,
          "method": p.method, "notes": p.notes} for p in payments],
        total,
    )
    safe_name = "_".join((worker.name or "worker").split())
    return f"{safe_name}_payments.pdf", content
