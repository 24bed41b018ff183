from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP, UniqueConstraint
from sqlalchemy.orm import relationship
from garage.database import Base


class VehicleServiceStatus:
    PENDING     = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED   = "completed"


class VehicleService(Base):
    """A catalog service scheduled on a vehicle during its stay."""
    __tablename__ = "vehicle_services"
    __table_args__ = (UniqueConstraint("vehicle_id", "service_id", name="uq_vehicle_service"),)

    id             = Column(Integer, primary_key=True, index=True)
    vehicle_id     = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id     = Column(Integer, ForeignKey("services.id"), nullable=False)
    status         = Column(String(30), default=VehicleServiceStatus.PENDING, nullable=False)
    completed_time = Column(TIMESTAMP(timezone=True), nullable=True)

    # ─── Relationships ─────────────────────────────────────────────────────────
    vehicle = relationship("Vehicle", back_populates="services")
    service = relationship("Service")

    def __repr__(self):
        return f"<VehicleService vehicle={self.vehicle_id} service={self.service_id} status={self.status}>"
