"""Transaction model for the database."""

from sqlalchemy import Column, Integer, String, Date, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from components.core.database import Base


class Transaction(Base):
    """Dated, signed money movement; positive is income, negative is expense."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False, default="Outros")
    value = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    goal_id = Column(Integer, ForeignKey("goals.id", ondelete="SET NULL"), nullable=True, index=True)

    # Relationships
    user = relationship("User", back_populates="transactions")
    goal = relationship("Goal", back_populates="transactions")
