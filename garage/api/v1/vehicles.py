from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from garage.database import get_db
from garage.schemas.vehicle import VehicleCreateRequest, VehicleUpdateRequest, ServiceStatusRequest
from garage.schemas.common import success_response
from garage.services.vehicle_workflow import vehicle_workflow

router = APIRouter()


@router.get("/vehicles", summary="List vehicles with their services")
def list_vehicles(db: Session = Depends(get_db)):
    return success_response("Vehicles retrieved", vehicle_workflow.list_vehicles(db))


@router.get("/vehicles/{vehicle_id}", summary="Get vehicle with services, parts and latest invoice")
def get_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    return success_response("Vehicle retrieved", vehicle_workflow.get_vehicle(db, vehicle_id))


@router.post("/vehicles", status_code=status.HTTP_201_CREATED, summary="Register a vehicle entering the garage")
def create_vehicle(body: VehicleCreateRequest, db: Session = Depends(get_db)):
    return success_response("Vehicle created successfully", vehicle_workflow.create_vehicle(db, body))


@router.put("/vehicles/{vehicle_id}", summary="Update vehicle and replace its parts")
def update_vehicle(vehicle_id: int, body: VehicleUpdateRequest, db: Session = Depends(get_db)):
    return success_response("Vehicle updated successfully",
                            vehicle_workflow.update_vehicle(db, vehicle_id, body))


@router.put("/vehicles/{vehicle_id}/exit", summary="Mark vehicle as exited")
def exit_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    vehicle_workflow.exit_vehicle(db, vehicle_id)
    return success_response("Vehicle exited successfully.", None)


@router.put("/vehicles/{vehicle_id}/services/{service_id}", summary="Update a service's status on a vehicle")
def update_service_status(
    vehicle_id: int,
    service_id: int,
    body:       ServiceStatusRequest,
    db:         Session = Depends(get_db),
):
    vehicle_workflow.update_service_status(db, vehicle_id, service_id, body)
    return success_response("Service status updated successfully", None)


@router.delete("/vehicles/{vehicle_id}", summary="Delete vehicle with its invoices")
def delete_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    vehicle_workflow.delete_vehicle(db, vehicle_id)
    return success_response("Vehicle deleted successfully", None)


@router.get("/vehicle-ids", summary="Vehicle ids for pickers")
def list_vehicle_ids(db: Session = Depends(get_db)):
    return success_response("Vehicle ids retrieved", vehicle_workflow.list_vehicle_ids(db))
