from sqlalchemy import Column, Integer, String, Text, ForeignKey, TIMESTAMP, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from garage.database import Base


class WorkerPayment(Base):
    __tablename__ = "worker_payments"

    id           = Column(Integer, primary_key=True, index=True)
    worker_id    = Column(Integer, ForeignKey("workers.id"), nullable=False, index=True)
    amount       = Column(Numeric(14, 2), nullable=False)
    method       = Column(String(50), nullable=True)
    notes        = Column(Text, nullable=True)
    payment_date = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=True)

    # ─── Relationships ─────────────────────────────────────────────────────────
    worker = relationship("Worker", back_populates="payments")

    def __repr__(self):
        return f"<WorkerPayment id={self.id} worker={self.worker_id} amount={self.amount}>"
