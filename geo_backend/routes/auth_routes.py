from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from geo_backend.auth import jwt_handler
from geo_backend.core.errors import InvalidCredentialsError
from geo_backend.database import get_db
from geo_backend.stores import identity_store

router = APIRouter(tags=['auth'])


class CredentialsRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('Email is required.')
        return value

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError('Password is required.')
        return value


class AccountResponse(BaseModel):
    id: str
    email: str
    role: str

    class Config:
        from_attributes = True


class RegisterResponse(BaseModel):
    message: str
    data: AccountResponse


class LoginResponse(BaseModel):
    message: str
    user: AccountResponse
    access_token: str
    token_type: str = 'bearer'


@router.post('/register', response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(data: CredentialsRequest, db: Session = Depends(get_db)):
    user = identity_store.create_user(db, data.email, data.password)
    return RegisterResponse(
        message='Registration successful.',
        data=AccountResponse.model_validate(user),
    )


@router.post('/login', response_model=LoginResponse)
def login(data: CredentialsRequest, db: Session = Depends(get_db)):
    user = identity_store.find_by_credentials(db, data.email, data.password)
    if user is None:
        raise InvalidCredentialsError()

    return LoginResponse(
        message='Login successful.',
        user=AccountResponse.model_validate(user),
        access_token=jwt_handler.create_access_token(subject=user.email),
    )
