"""Repository for user operations."""

from datetime import date
from typing import Optional

import structlog
from sqlalchemy import select

from components.core.repository import BaseRepository
from components.core.security import get_password_hash, verify_password
from components.user.models import User
from components.user.schemas import UserCreate

logger = structlog.get_logger(__name__)


class UserRepository(BaseRepository):
    """Repository for user operations."""

    async def create(self, user: UserCreate) -> User:
        """Create a new user."""
        db_user = User(
            email=user.email.lower(),
            password=get_password_hash(user.password),
            registration_date=date.today()
        )
        self.session.add(db_user)
        await self._commit()
        await self.session.refresh(db_user)
        logger.info("user_registered", user_id=db_user.id)
        return db_user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self._execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        result = await self._execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def exists(self, email: str) -> bool:
        """Check if user with given email exists."""
        result = await self._execute(
            select(User.id).where(User.email == email.lower())
        )
        return result.scalar_one_or_none() is not None

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user when the credentials match."""
        user = await self.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.warning("login_failed", email=email)
            return None
        return user
