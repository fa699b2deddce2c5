"""Mapper for User ORM and domain conversion."""

from tenx_cards.domain.common.value_objects import UserId
from tenx_cards.domain.identity.entities.user import User
from tenx_cards.models import User as UserORM


class UserMapper:
    """Converts between the users table and the User entity."""

    def to_domain(self, orm_model: UserORM) -> User:
        return User.create_with_id(
            id=UserId(orm_model.id),
            email=orm_model.email,
            hashed_password=orm_model.hashed_password,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        if orm_model is not None:
            # Email is immutable after sign-up; only the password hash changes
            orm_model.hashed_password = domain_entity.hashed_password
            return orm_model

        return UserORM(
            email=domain_entity.email,
            hashed_password=domain_entity.hashed_password,
        )
