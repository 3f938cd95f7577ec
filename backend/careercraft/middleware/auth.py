"""Bearer-token authentication dependencies.

Sessions are issued by the external identity provider as signed JWTs whose
``sub`` claim is the provider's user id. This module only verifies them and
maps the subject onto a stored User row.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from careercraft.config import settings
from careercraft.database import get_db
from careercraft.errors import Unauthorized, UserNotFound
from careercraft.models.user import User

security = HTTPBearer(auto_error=False)


def create_access_token(data: dict) -> str:
    """Sign a session token the way the identity provider does (dev and tests)."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    if settings.AUTH_ISSUER:
        to_encode.setdefault("iss", settings.AUTH_ISSUER)
    return jwt.encode(to_encode, settings.AUTH_SECRET_KEY, algorithm=settings.AUTH_ALGORITHM)


def decode_token(token: str) -> dict:
    options = {"verify_aud": False}
    try:
        return jwt.decode(
            token,
            settings.AUTH_SECRET_KEY,
            algorithms=[settings.AUTH_ALGORITHM],
            issuer=settings.AUTH_ISSUER or None,
            options=options,
        )
    except JWTError:
        raise Unauthorized("Invalid or expired token")


def get_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """Verified token claims for the caller. No storage access."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized()
    payload = decode_token(credentials.credentials)
    if not payload.get("sub"):
        raise Unauthorized("Invalid token payload")
    return payload


def resolve_user(db: Session, identity: dict) -> User:
    user = db.query(User).filter(User.clerk_user_id == identity["sub"]).first()
    if not user:
        raise UserNotFound()
    return user


def get_current_user(
    identity: dict = Depends(get_identity),
    db: Session = Depends(get_db),
) -> User:
    return resolve_user(db, identity)
