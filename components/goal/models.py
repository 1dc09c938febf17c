"""Goal model for the database."""

from sqlalchemy import Column, Integer, String, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from components.core.database import Base


class Goal(Base):
    """Savings goal; current is the sum of linked transaction values."""
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    current = Column(Numeric(12, 2), nullable=False, default=0)
    target = Column(Numeric(12, 2), nullable=False)
    color = Column(String(20), nullable=False, default="#FF6600")

    # Relationships
    user = relationship("User", back_populates="goals")
    transactions = relationship("Transaction", back_populates="goal", passive_deletes=True)
