import logging
from sqlalchemy.orm import Session

from garage.database import unit_of_work
from garage.models.part import Part
from garage.schemas.part import PartWriteRequest
from garage.utils.exceptions import NotFoundException, DuplicateEntryException

logger = logging.getLogger(__name__)


def serialize_part(p: Part) -> dict:
    return {
        "id":                p.id,
        "name":              p.name,
        "part_number":       p.part_number,
        "purchasing_cost":   float(p.purchasing_cost),
        "selling_cost":      float(p.selling_cost),
        "quantity_in_stock": p.quantity_in_stock,
    }


class PartService:

    def list_parts(self, db: Session) -> list[dict]:
        return [serialize_part(p) for p in db.query(Part).order_by(Part.name).all()]

    def get_part(self, db: Session, part_id: int) -> dict:
        p = db.query(Part).filter(Part.id == part_id).first()
        if not p:
            raise NotFoundException("Part")
        return serialize_part(p)

    def _check_part_number(self, db: Session, part_number: str, exclude_id: int | None = None) -> None:
        q = db.query(Part).filter(Part.part_number == part_number)
        if exclude_id is not None:
            q = q.filter(Part.id != exclude_id)
        if q.first():
            raise DuplicateEntryException("Part number already registered", field="part_number")

    def create_part(self, db: Session, data: PartWriteRequest) -> dict:
        self._check_part_number(db, data.part_number)
        part = Part(**data.model_dump())
        with unit_of_work(db):
            db.add(part)
        db.refresh(part)
        logger.info(f"Created part #{part.id} ({part.part_number})")
        return serialize_part(part)

    def update_part(self, db: Session, part_id: int, data: PartWriteRequest) -> dict:
        p = db.query(Part).filter(Part.id == part_id).first()
        if not p:
            raise NotFoundException("Part")
        self._check_part_number(db, data.part_number, exclude_id=part_id)

        with unit_of_work(db):
            for field, value in data.model_dump().items():
                setattr(p, field, value)
        db.refresh(p)
        return serialize_part(p)

    def delete_part(self, db: Session, part_id: int) -> None:
        with unit_of_work(db):
            deleted = db.query(Part).filter(Part.id == part_id).delete(synchronize_session=False)
        if not deleted:
            raise NotFoundException("Part")
        logger.info(f"Deleted part #{part_id}")


part_service = PartService()
