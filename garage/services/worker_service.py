import logging
from sqlalchemy.orm import Session

from garage.database import unit_of_work
from garage.models.service import Service
from garage.models.worker import Worker
from garage.models.worker_payment import WorkerPayment
from garage.schemas.worker import WorkerWriteRequest
from garage.utils.exceptions import NotFoundException

logger = logging.getLogger(__name__)


def serialize_worker(w: Worker) -> dict:
    return {
        "id":        w.id,
        "name":      w.name,
        "job_title": w.job_title,
        "phone":     w.phone,
        "email":     w.email,
    }


class WorkerService:

    def list_workers(self, db: Session) -> list[dict]:
        return [serialize_worker(w) for w in db.query(Worker).order_by(Worker.name).all()]

    def find_worker(self, db: Session, worker_id: int) -> Worker:
        w = db.query(Worker).filter(Worker.id == worker_id).first()
        if not w:
            raise NotFoundException("Worker")
        return w

    def get_worker(self, db: Session, worker_id: int) -> dict:
        return serialize_worker(self.find_worker(db, worker_id))

    def create_worker(self, db: Session, data: WorkerWriteRequest) -> dict:
        worker = Worker(**data.model_dump())
        with unit_of_work(db):
            db.add(worker)
        db.refresh(worker)
        logger.info(f"Created worker #{worker.id} ({worker.name})")
        return serialize_worker(worker)

    def update_worker(self, db: Session, worker_id: int, data: WorkerWriteRequest) -> dict:
        w = self.find_worker(db, worker_id)
        with unit_of_work(db):
            for field, value in data.model_dump().items():
                setattr(w, field, value)
        db.refresh(w)
        return serialize_worker(w)

    def delete_worker(self, db: Session, worker_id: int) -> None:
        """
        Unassign the worker from every service, drop its payments, then
        delete the worker, all in one transaction.
        """
        with unit_of_work(db):
            db.query(Service).filter(Service.worker_id == worker_id)\
              .update({Service.worker_id: None}, synchronize_session=False)
            db.query(WorkerPayment).filter(WorkerPayment.worker_id == worker_id)\
              .delete(synchronize_session=False)
            deleted = db.query(Worker).filter(Worker.id == worker_id).delete(synchronize_session=False)
        if not deleted:
            raise NotFoundException("Worker")
        logger.info(f"Deleted worker #{worker_id}")


worker_service = WorkerService()
