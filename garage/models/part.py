from sqlalchemy import Column, Integer, String, Numeric
from garage.database import Base


class Part(Base):
    __tablename__ = "parts"

    id                = Column(Integer, primary_key=True, index=True)
    name              = Column(String(200), nullable=False)
    part_number       = Column(String(100), unique=True, nullable=False, index=True)
    purchasing_cost   = Column(Numeric(14, 2), nullable=False)
    selling_cost      = Column(Numeric(14, 2), nullable=False)
    quantity_in_stock = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Part id={self.id} part_number={self.part_number}>"
