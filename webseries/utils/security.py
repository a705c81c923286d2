"""
Password hashing, session tokens and role checks
"""
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Tuple

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.orm import Session

from webseries.config import settings
from webseries.database import get_db
from webseries.exceptions import Forbidden, Unauthenticated
from webseries.models.viewer import Role, Viewer

bearer_scheme = HTTPBearer(auto_error=False)

STAFF_ROLES: Tuple[Role, ...] = (Role.EMPLOYEE, Role.ADMIN)
ADMIN_ROLES: Tuple[Role, ...] = (Role.ADMIN,)


class TokenData(BaseModel):
    viewer_id: int
    email: str
    role: Role


# ============================================
# PASSWORDS
# ============================================

def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# ============================================
# TOKENS
# ============================================

def create_access_token(viewer: Viewer, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token carrying the viewer's id, email and role at issue time"""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    role = Role(viewer.role or Role.CUSTOMER)
    payload = {
        "sub": viewer.email,
        "viewer_id": viewer.id,
        "role": role.value,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> TokenData:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token has expired")
    except jwt.InvalidTokenError:
        raise Unauthenticated("Invalid token")

    try:
        return TokenData(
            viewer_id=payload["viewer_id"],
            email=payload["sub"],
            role=payload.get("role", Role.CUSTOMER.value),
        )
    except (KeyError, ValueError):
        raise Unauthenticated("Invalid token")


# ============================================
# ROLE GATE
# ============================================

class RoleGate:
    """
    Authorization decisions based on the role currently stored for a viewer.

    The role inside a token is only a snapshot taken at login, so it is never
    consulted here.
    """

    @staticmethod
    def authorize(viewer_id: int, allowed_roles: Iterable[Role], db: Session) -> Viewer:
        viewer = db.query(Viewer).filter(Viewer.id == viewer_id).first()
        if not viewer:
            raise Unauthenticated("User not found")

        allowed = tuple(allowed_roles)
        current = Role(viewer.role or Role.CUSTOMER)
        if current not in allowed:
            raise Forbidden(
                "Access denied. Insufficient permissions.",
                required=[role.value for role in allowed],
                current=current.value,
            )
        return viewer

    @staticmethod
    def authorize_owner_or_role(
        viewer: Viewer,
        resource_owner_id: int,
        admin_roles: Iterable[Role] = ADMIN_ROLES,
        message: str = "Access denied. You can only modify your own resources.",
    ) -> Viewer:
        if viewer.id == resource_owner_id:
            return viewer
        if Role(viewer.role or Role.CUSTOMER) in tuple(admin_roles):
            return viewer
        raise Forbidden(message)


# ============================================
# DEPENDENCIES
# ============================================

def get_token_data(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenData:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthenticated("Authentication required")
    return verify_token(credentials.credentials)


def get_current_viewer(
    token_data: TokenData = Depends(get_token_data),
    db: Session = Depends(get_db),
) -> Viewer:
    """Any authenticated viewer that still exists"""
    return RoleGate.authorize(token_data.viewer_id, tuple(Role), db)


def require_roles(*allowed_roles: Role):
    def dependency(
        token_data: TokenData = Depends(get_token_data),
        db: Session = Depends(get_db),
    ) -> Viewer:
        return RoleGate.authorize(token_data.viewer_id, allowed_roles, db)

    return dependency


require_staff = require_roles(*STAFF_ROLES)
require_admin = require_roles(*ADMIN_ROLES)
