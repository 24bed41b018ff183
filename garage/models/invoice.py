import enum
from sqlalchemy import Column, Integer, Text, ForeignKey, TIMESTAMP, Numeric, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from garage.database import Base


class InvoiceItemType(str, enum.Enum):
    SERVICE = "service"
    PART    = "part"


class Invoice(Base):
    __tablename__ = "invoices"

    id               = Column(Integer, primary_key=True, index=True)
    vehicle_id       = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    days_in_garage   = Column(Integer, default=0, nullable=False)
    garage_stay_rate = Column(Numeric(14, 2), nullable=False)
    # Computed server-side, never taken from the client
    subtotal         = Column(Numeric(14, 2), default=0, nullable=False)
    tax              = Column(Numeric(14, 2), default=0, nullable=False)
    total            = Column(Numeric(14, 2), default=0, nullable=False)
    created_at       = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    vehicle = relationship("Vehicle", back_populates="invoices")
    items   = relationship("InvoiceItem", back_populates="invoice", order_by="InvoiceItem.id")

    def __repr__(self):
        return f"<Invoice id={self.id} vehicle={self.vehicle_id} total={self.total}>"


class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id             = Column(Integer, primary_key=True, index=True)
    invoice_id     = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    item_type      = Column(Enum(InvoiceItemType, values_callable=lambda e: [m.value for m in e],
                                 name="invoice_item_type"), nullable=False)
    item_id        = Column(Integer, nullable=False)   # services.id or parts.id, depending on item_type
    description    = Column(Text, nullable=True)
    quantity       = Column(Integer, default=1, nullable=False)
    purchased_cost = Column(Numeric(14, 2), nullable=True)  # parts only
    unit_price     = Column(Numeric(14, 2), nullable=False)
    total          = Column(Numeric(14, 2), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    invoice = relationship("Invoice", back_populates="items")

    def __repr__(self):
        return f"<InvoiceItem id={self.id} type={self.item_type} total={self.total}>"
