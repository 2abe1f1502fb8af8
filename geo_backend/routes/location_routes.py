import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from geo_backend.auth.access import ensure_can_modify
from geo_backend.auth.dependencies import get_current_user
from geo_backend.core.errors import NotFoundError
from geo_backend.database import get_db
from geo_backend.models.location import Location
from geo_backend.models.user import User
from geo_backend.stores import location_store

router = APIRouter(tags=['locations'])

logger = logging.getLogger(__name__)

LOCATION_NOT_FOUND = 'Location not found.'


class Coordinates(BaseModel):
    lat: float
    lng: float


class LocationRequest(BaseModel):
    name: str
    category: str = ''
    coordinates: Coordinates
    address: str = ''

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('Name is required.')
        return value

    def store_values(self) -> dict:
        return {
            'name': self.name,
            'category': self.category,
            'latitude': self.coordinates.lat,
            'longitude': self.coordinates.lng,
            'address': self.address,
        }


class LocationResponse(BaseModel):
    id: str
    name: str
    category: str
    coordinates: Coordinates
    address: str
    created_by: str


class LocationEnvelope(BaseModel):
    message: str
    data: LocationResponse


class MessageResponse(BaseModel):
    message: str


def to_response(location: Location) -> LocationResponse:
    return LocationResponse(
        id=location.id,
        name=location.name,
        category=location.category,
        coordinates=Coordinates(lat=location.latitude, lng=location.longitude),
        address=location.address,
        created_by=location.created_by,
    )


def load_owned_location(db: Session, location_id: str, requestor: User, action: str) -> Location:
    location = location_store.get_location(db, location_id)
    if location is None:
        raise NotFoundError(LOCATION_NOT_FOUND)

    ensure_can_modify(
        requestor.role,
        requestor.email,
        location.created_by,
        f'You are not allowed to {action} locations created by someone else.',
    )
    return location


@router.get('', response_model=list[LocationResponse])
def list_locations(db: Session = Depends(get_db)):
    return [to_response(location) for location in location_store.list_locations(db)]


@router.post('', response_model=LocationEnvelope, status_code=status.HTTP_201_CREATED)
def create_location(
    data: LocationRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    location = location_store.create_location(db, created_by=current_user.email, **data.store_values())
    logger.info('Location %s created by %s', location.id, current_user.email)
    return LocationEnvelope(message='Location added.', data=to_response(location))


@router.put('/{location_id}', response_model=LocationEnvelope)
def update_location(
    location_id: str,
    data: LocationRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    location = load_owned_location(db, location_id, current_user, 'edit')

    updated = location_store.update_location(db, location_id, location.created_by, data.store_values())
    if updated is None:
        raise NotFoundError(LOCATION_NOT_FOUND)

    return LocationEnvelope(message='Location updated.', data=to_response(updated))


@router.delete('/{location_id}', response_model=MessageResponse)
def delete_location(
    location_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    location = load_owned_location(db, location_id, current_user, 'delete')

    if not location_store.delete_location(db, location_id, location.created_by):
        raise NotFoundError(LOCATION_NOT_FOUND)

    logger.info('Location %s deleted by %s', location_id, current_user.email)
    return MessageResponse(message='Location deleted.')
