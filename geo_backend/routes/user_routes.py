from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from geo_backend.auth.dependencies import get_current_admin
from geo_backend.core.errors import NotFoundError
from geo_backend.database import get_db
from geo_backend.models.user import Role, User
from geo_backend.routes.auth_routes import AccountResponse
from geo_backend.stores import identity_store

router = APIRouter(tags=['users'])

USER_NOT_FOUND = 'User not found.'


class RoleUpdateRequest(BaseModel):
    role: Role


class RoleUpdateResponse(BaseModel):
    message: str
    data: AccountResponse


class MessageResponse(BaseModel):
    message: str


@router.get('', response_model=list[AccountResponse])
def list_users(
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return [AccountResponse.model_validate(user) for user in identity_store.list_users(db)]


@router.put('/{user_id}/role', response_model=RoleUpdateResponse)
def update_user_role(
    user_id: str,
    data: RoleUpdateRequest,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    user = identity_store.update_role(db, user_id, data.role)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)

    return RoleUpdateResponse(message='User role updated.', data=AccountResponse.model_validate(user))


@router.delete('/{user_id}', response_model=MessageResponse)
def delete_user(
    user_id: str,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    # locations created by this user keep their created_by email
    if not identity_store.delete_user(db, user_id):
        raise NotFoundError(USER_NOT_FOUND)

    return MessageResponse(message='User deleted.')
