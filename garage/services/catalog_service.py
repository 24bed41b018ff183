import logging
from sqlalchemy.orm import Session

from garage.database import unit_of_work
from garage.models.service import Service
from garage.models.worker import Worker
from garage.schemas.service import ServiceWriteRequest
from garage.utils.exceptions import NotFoundException

logger = logging.getLogger(__name__)


def serialize_service(s: Service) -> dict:
    return {
        "id":          s.id,
        "name":        s.name,
        "category":    s.category,
        "worker_id":   s.worker_id,
        "worker_name": s.worker.name if s.worker else None,
    }


class CatalogService:
    """The garage's list of repair-job types and who is assigned to each."""

    def _find(self, db: Session, service_id: int) -> Service:
        s = db.query(Service).filter(Service.id == service_id).first()
        if not s:
            raise NotFoundException("Service")
        return s

    def _check_worker(self, db: Session, worker_id: int | None) -> None:
        if worker_id is not None and not db.query(Worker).filter(Worker.id == worker_id).first():
            raise NotFoundException("Worker")

    def list_services(self, db: Session) -> list[dict]:
        return [serialize_service(s) for s in db.query(Service).order_by(Service.name).all()]

    def get_service(self, db: Session, service_id: int) -> dict:
        return serialize_service(self._find(db, service_id))

    def create_service(self, db: Session, data: ServiceWriteRequest) -> dict:
        self._check_worker(db, data.worker_id)
        service = Service(**data.model_dump())
        with unit_of_work(db):
            db.add(service)
        db.refresh(service)
        logger.info(f"Created service #{service.id} ({service.name})")
        return serialize_service(service)

    def update_service(self, db: Session, service_id: int, data: ServiceWriteRequest) -> dict:
        s = self._find(db, service_id)
        self._check_worker(db, data.worker_id)
        with unit_of_work(db):
            for field, value in data.model_dump().items():
                setattr(s, field, value)
        db.refresh(s)
        return serialize_service(s)

    def assign_worker(self, db: Session, service_id: int, worker_id: int) -> dict:
        s = self._find(db, service_id)
        self._check_worker(db, worker_id)
        with unit_of_work(db):
            s.worker_id = worker_id
        db.refresh(s)
        return serialize_service(s)

    def delete_service(self, db: Session, service_id: int) -> None:
        with unit_of_work(db):
            deleted = db.query(Service).filter(Service.id == service_id).delete(synchronize_session=False)
        if not deleted:
            raise NotFoundException("Service")


catalog_service = CatalogService()
