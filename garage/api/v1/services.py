from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from garage.database import get_db
from garage.schemas.service import ServiceWriteRequest, AssignWorkerRequest
from garage.schemas.common import success_response
from garage.services.catalog_service import catalog_service

router = APIRouter(prefix="/services")


@router.get("", summary="List services with assigned workers")
def list_services(db: Session = Depends(get_db)):
    return success_response("Services retrieved", catalog_service.list_services(db))


@router.get("/{service_id}", summary="Get service by ID")
def get_service(service_id: int, db: Session = Depends(get_db)):
    return success_response("Service retrieved", catalog_service.get_service(db, service_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create service")
def create_service(body: ServiceWriteRequest, db: Session = Depends(get_db)):
    return success_response("Service created successfully", catalog_service.create_service(db, body))


@router.put("/{service_id}", summary="Update service")
def update_service(service_id: int, body: ServiceWriteRequest, db: Session = Depends(get_db)):
    return success_response("Service updated successfully",
                            catalog_service.update_service(db, service_id, body))


@router.put("/{service_id}/assign-worker", summary="Assign a worker to a service")
def assign_worker(service_id: int, body: AssignWorkerRequest, db: Session = Depends(get_db)):
    return success_response("Worker assigned",
                            catalog_service.assign_worker(db, service_id, body.worker_id))


@router.delete("/{service_id}", summary="Delete service")
def delete_service(service_id: int, db: Session = Depends(get_db)):
    catalog_service.delete_service(db, service_id)
    return success_response("Service deleted successfully", None)
