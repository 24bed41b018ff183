from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from garage.database import Base


class Worker(Base):
    __tablename__ = "workers"

    id        = Column(Integer, primary_key=True, index=True)
    name      = Column(String(150), nullable=False)
    job_title = Column(String(100), nullable=True)
    phone     = Column(String(30), nullable=True)
    email     = Column(String(150), nullable=True)

    # ─── Relationships ─────────────────────────────────────────────────────────
    services = relationship("Service", back_populates="worker")
    payments = relationship("WorkerPayment", back_populates="worker")

    def __repr__(self):
        return f"<Worker id={self.id} name={self.name}>"
