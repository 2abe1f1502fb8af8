"""Location model definitions."""

from sqlalchemy import Column, Float, String
from geo_backend.database import Base
from geo_backend.models.user import new_id


class Location(Base):
    """Represents a map annotation owned by the account that created it."""
    __tablename__ = "locations"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, default="")
    latitude = Column(Float, nullable=False, default=0.0)
    longitude = Column(Float, nullable=False, default=0.0)
    address = Column(String, nullable=False, default="")
    created_by = Column(String, index=True, nullable=False)
