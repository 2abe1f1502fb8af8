"""Persistence helpers for map locations.

Mutations are conditional on the owner observed when the caller loaded the
record, so a record whose owner changed (or that was deleted) in between is
left untouched and reported as missing.
"""

from sqlalchemy.orm import Session

from geo_backend.database import store_operation
from geo_backend.models.location import Location

EDITABLE_FIELDS = ('name', 'category', 'latitude', 'longitude', 'address')


def list_locations(db: Session) -> list[Location]:
    with store_operation(db, 'list locations'):
        return db.query(Location).all()


def get_location(db: Session, location_id: str) -> Location | None:
    with store_operation(db, 'load location'):
        return db.get(Location, location_id)


def create_location(
    db: Session,
    *,
    name: str,
    category: str,
    latitude: float,
    longitude: float,
    address: str,
    created_by: str,
) -> Location:
    location = Location(
        name=name,
        category=category,
        latitude=latitude,
        longitude=longitude,
        address=address,
        created_by=created_by,
    )
    with store_operation(db, 'save location'):
        db.add(location)
        db.commit()
        db.refresh(location)
    return location


def update_location(db: Session, location_id: str, expected_owner: str, values: dict) -> Location | None:
    changes = {field: values[field] for field in EDITABLE_FIELDS if field in values}

    with store_operation(db, 'update location'):
        updated = db.query(Location).filter(
            Location.id == location_id,
            Location.created_by == expected_owner,
        ).update(changes, synchronize_session=False)
        db.commit()

        if not updated:
            return None
        return db.get(Location, location_id)


def delete_location(db: Session, location_id: str, expected_owner: str) -> bool:
    with store_operation(db, 'delete location'):
        deleted = db.query(Location).filter(
            Location.id == location_id,
            Location.created_by == expected_owner,
        ).delete(synchronize_session=False)
        db.commit()

    return bool(deleted)
