from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from garage.database import Base


class VehicleStandalonePart(Base):
    """Part consumed on a vehicle without being tied to a service."""
    __tablename__ = "vehicle_parts"

    id         = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    part_id    = Column(Integer, ForeignKey("parts.id"), nullable=False)
    quantity   = Column(Integer, default=1, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    vehicle = relationship("Vehicle", back_populates="standalone_parts")
    part    = relationship("Part")

    def __repr__(self):
        return f"<VehicleStandalonePart vehicle={self.vehicle_id} part={self.part_id} qty={self.quantity}>"


class VehicleServicePart(Base):
    """Part consumed while performing a specific service on a vehicle."""
    __tablename__ = "vehicle_service_parts"

    id         = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    part_id    = Column(Integer, ForeignKey("parts.id"), nullable=False)
    quantity   = Column(Integer, default=1, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    vehicle = relationship("Vehicle", back_populates="service_parts")
    part    = relationship("Part")

    def __repr__(self):
        return (f"<VehicleServicePart vehicle={self.vehicle_id} service={self.service_id} "
                f"part={self.part_id} qty={self.quantity}>")
