from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from garage.database import get_db
from garage.schemas.part import PartWriteRequest
from garage.schemas.common import success_response
from garage.services.part_service import part_service

router = APIRouter(prefix="/parts")


@router.get("", summary="List parts")
def list_parts(db: Session = Depends(get_db)):
    return success_response("Parts retrieved", part_service.list_parts(db))


@router.get("/{part_id}", summary="Get part by ID")
def get_part(part_id: int, db: Session = Depends(get_db)):
    return success_response("Part retrieved", part_service.get_part(db, part_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create part")
def create_part(body: PartWriteRequest, db: Session = Depends(get_db)):
    return success_response("Part created successfully", part_service.create_part(db, body))


@router.put("/{part_id}", summary="Update part")
def update_part(part_id: int, body: PartWriteRequest, db: Session = Depends(get_db)):
    return success_response("Part updated successfully", part_service.update_part(db, part_id, body))


@router.delete("/{part_id}", summary="Delete part")
def delete_part(part_id: int, db: Session = Depends(get_db)):
    part_service.delete_part(db, part_id)
    return success_response("Part deleted successfully", None)
