import jwt
from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from geo_backend.auth import jwt_handler
from geo_backend.auth.access import require_admin
from geo_backend.core import config
from geo_backend.core.errors import UnauthenticatedError, UnknownIdentityError
from geo_backend.database import get_db
from geo_backend.models.user import User
from geo_backend.stores import identity_store

security = HTTPBearer(auto_error=False)


def asserted_email(
    credentials: HTTPAuthorizationCredentials | None,
    identity_header: str | None,
) -> str:
    """Return the email the caller claims to be.

    A bearer token issued by /login wins over the identity header. The header
    is only honoured while TRUST_IDENTITY_HEADER is enabled.
    """
    if credentials is not None:
        try:
            payload = jwt_handler.decode_access_token(credentials.credentials)
        except jwt.PyJWTError as exc:
            raise UnauthenticatedError("Invalid or expired token.") from exc

        email = payload.get("sub")
        if not email:
            raise UnauthenticatedError("Invalid token subject.")
        return email

    if config.TRUST_IDENTITY_HEADER and identity_header and identity_header.strip():
        return identity_header

    raise UnauthenticatedError()


def resolve_identity(db: Session, email: str) -> User:
    user = identity_store.find_by_email(db, email)
    if user is None:
        raise UnknownIdentityError()
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    identity_header: str | None = Header(default=None, alias=config.IDENTITY_HEADER),
    db: Session = Depends(get_db),
) -> User:
    return resolve_identity(db, asserted_email(credentials, identity_header))


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    require_admin(current_user.role, "Admins only.")
    return current_user
