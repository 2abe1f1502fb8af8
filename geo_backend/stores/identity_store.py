"""Persistence helpers for registered accounts."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from geo_backend.core.errors import DuplicateIdentityError
from geo_backend.database import store_operation
from geo_backend.models.user import Role, User

logger = logging.getLogger(__name__)


def find_by_email(db: Session, email: str) -> User | None:
    with store_operation(db, 'look up account'):
        return db.query(User).filter(User.email == email).first()


def find_by_credentials(db: Session, email: str, password: str) -> User | None:
    with store_operation(db, 'look up account'):
        return db.query(User).filter(User.email == email, User.password == password).first()


def get_user(db: Session, user_id: str) -> User | None:
    with store_operation(db, 'load account'):
        return db.get(User, user_id)


def list_users(db: Session) -> list[User]:
    with store_operation(db, 'list accounts'):
        return db.query(User).order_by(User.email.asc()).all()


def create_user(db: Session, email: str, password: str, role: Role = Role.USER) -> User:
    if find_by_email(db, email) is not None:
        raise DuplicateIdentityError()

    user = User(email=email, password=password, role=role.value)
    with store_operation(db, 'register account'):
        try:
            db.add(user)
            db.commit()
        except IntegrityError as exc:
            # lost the race against a concurrent registration
            db.rollback()
            raise DuplicateIdentityError() from exc
        db.refresh(user)

    logger.info('Registered account %s with role %s', user.email, user.role)
    return user


def update_role(db: Session, user_id: str, role: Role) -> User | None:
    with store_operation(db, 'update role'):
        user = db.get(User, user_id)
        if user is None:
            return None
        user.role = role.value
        db.commit()
        db.refresh(user)

    logger.info('Account %s is now %s', user.email, user.role)
    return user


def delete_user(db: Session, user_id: str) -> bool:
    with store_operation(db, 'delete account'):
        deleted = db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        db.commit()

    if deleted:
        logger.info('Deleted account %s', user_id)
    return bool(deleted)
