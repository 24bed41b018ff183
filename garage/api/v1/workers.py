from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from garage.database import get_db
from garage.schemas.worker import WorkerWriteRequest
from garage.schemas.payment import PaymentCreateRequest
from garage.schemas.common import success_response
from garage.services.worker_service import worker_service
from garage.services import payment_service

router = APIRouter(prefix="/workers")


@router.get("", summary="List workers")
def list_workers(db: Session = Depends(get_db)):
    return success_response("Workers retrieved", worker_service.list_workers(db))


@router.get("/{worker_id}", summary="Get worker by ID")
def get_worker(worker_id: int, db: Session = Depends(get_db)):
    return success_response("Worker retrieved", worker_service.get_worker(db, worker_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create worker")
def create_worker(body: WorkerWriteRequest, db: Session = Depends(get_db)):
    return success_response("Worker created successfully", worker_service.create_worker(db, body))


@router.put("/{worker_id}", summary="Update worker")
def update_worker(worker_id: int, body: WorkerWriteRequest, db: Session = Depends(get_db)):
    return success_response("Worker updated successfully", worker_service.update_worker(db, worker_id, body))


@router.delete("/{worker_id}", summary="Delete worker (unassigns services, removes payments)")
def delete_worker(worker_id: int, db: Session = Depends(get_db)):
    worker_service.delete_worker(db, worker_id)
    return success_response("Worker deleted successfully", None)


# ─── Payments ─────────────────────────────────────────────────────────────────
@router.get("/{worker_id}/payments", summary="List a worker's payments with their total")
def list_payments(worker_id: int, db: Session = Depends(get_db)):
    return success_response("Payments retrieved", payment_service.list_payments(db, worker_id))


@router.post("/{worker_id}/payments", status_code=status.HTTP_201_CREATED, summary="Record a payment")
def add_payment(worker_id: int, body: PaymentCreateRequest, db: Session = Depends(get_db)):
    return success_response("Payment recorded", payment_service.add_payment(db, worker_id, body))


@router.get("/{worker_id}/payments/total", summary="Total paid to a worker")
def total_paid(worker_id: int, db: Session = Depends(get_db)):
    return success_response("Total calculated", {"total_paid": payment_service.total_paid(db, worker_id)})


@router.get("/{worker_id}/payments/pdf", summary="Download payment report (PDF)")
def payments_pdf(worker_id: int, db: Session = Depends(get_db)):
    filename, content = payment_service.payment_report_pdf(db, worker_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
