"""Repository for User domain entities."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tenx_cards.domain.common.value_objects import UserId
from tenx_cards.domain.identity.entities.user import User
from tenx_cards.domain.identity.exceptions import EmailAlreadyExistsError, UserNotFoundError
from tenx_cards.infrastructure.identity.mappers.user_mapper import UserMapper
from tenx_cards.models import User as UserORM

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = UserMapper()

    def find_by_id(self, user_id: UserId) -> User | None:
        stmt = select(UserORM).where(UserORM.id == user_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_email(self, email: str) -> User | None:
        """
        Find a user by email.

        Args:
            email: The user's email address, compared case-insensitively

        Returns:
            User entity if found, None otherwise
        """
        stmt = select(UserORM).where(UserORM.email == email.strip().lower())
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, user: User) -> User:
        """
        Save a user entity.

        Raises:
            EmailAlreadyExistsError: If the email is already registered (new users)
            UserNotFoundError: If an existing user vanished before the update
        """
        if not user.id.is_persisted():
            try:
                orm_model = self.mapper.to_orm(user)
                self.db.add(orm_model)
                self.db.commit()
                self.db.refresh(orm_model)
            except IntegrityError as e:
                self.db.rollback()
                if "email" in str(e.orig).lower() or "unique" in str(e.orig).lower():
                    raise EmailAlreadyExistsError(user.email) from e
                raise
            logger.info(f"Created user id={orm_model.id}")
            return self.mapper.to_domain(orm_model)

        stmt = select(UserORM).where(UserORM.id == user.id.value)
        existing = self.db.execute(stmt).scalar_one_or_none()
        if existing is None:
            raise UserNotFoundError(user.id.value)

        orm_model = self.mapper.to_orm(user, existing)
        self.db.commit()
        self.db.refresh(orm_model)
        logger.info(f"Updated user {user.id.value}")
        return self.mapper.to_domain(orm_model)
