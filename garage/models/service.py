from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from garage.database import Base


class Service(Base):
    """A repair-job type from the garage catalog."""
    __tablename__ = "services"

    id        = Column(Integer, primary_key=True, index=True)
    name      = Column(String(150), nullable=False)
    category  = Column(String(100), nullable=True)
    worker_id = Column(Integer, ForeignKey("workers.id", ondelete="SET NULL"), nullable=True)  # NULL = unassigned

    # ─── Relationships ─────────────────────────────────────────────────────────
    worker = relationship("Worker", back_populates="services")

    def __repr__(self):
        return f"<Service id={self.id} name={self.name} worker_id={self.worker_id}>"
