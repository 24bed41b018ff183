from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from garage.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id             = Column(Integer, primary_key=True, index=True)
    plate          = Column(String(20), nullable=False, index=True)
    make           = Column(String(100), nullable=True)
    model_name     = Column(String(100), nullable=True)
    year           = Column(Integer, nullable=True)
    vin            = Column(String(50), nullable=True)
    owner          = Column(String(150), nullable=False)
    contact_number = Column(String(30), nullable=False)
    entry_time     = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    exit_time      = Column(TIMESTAMP(timezone=True), nullable=True)  # NULL = still in the garage

    # ─── Relationships ─────────────────────────────────────────────────────────
    services         = relationship("VehicleService", back_populates="vehicle",
                                    order_by="VehicleService.id")
    standalone_parts = relationship("VehicleStandalonePart", back_populates="vehicle",
                                    order_by="VehicleStandalonePart.id")
    service_parts    = relationship("VehicleServicePart", back_populates="vehicle",
                                    order_by="VehicleServicePart.id")
    invoices         = relationship("Invoice", back_populates="vehicle", order_by="Invoice.id")

    def __repr__(self):
        return f"<Vehicle id={self.id} plate={self.plate}>"
