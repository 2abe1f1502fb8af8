"""Account model definitions."""

import enum
import uuid

from sqlalchemy import Column, String
from geo_backend.database import Base


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


def new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    """Represents a registered account."""
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)  # stored as given
    role = Column(String, nullable=False, default=Role.USER.value)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
