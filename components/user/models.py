"""User model for the database."""

from sqlalchemy import Column, Integer, String, Date
from sqlalchemy.orm import relationship

from components.core.database import Base


class User(Base):
    """User model representing an account owner."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # Hashed password
    registration_date = Column(Date, nullable=False)

    goals = relationship("Goal", back_populates="user", cascade="all, delete-orphan")
    transactions = relationship(
        "Transaction", back_populates="user", cascade="all, delete-orphan"
    )
