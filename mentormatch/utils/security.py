# mentormatch/utils/security.py
"""
Password hashing and bearer-token authentication.

Tokens carry the user's email as ``sub`` and their role; the account is
re-read on every request so role changes and deactivation apply at once.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from mentormatch import models
from mentormatch.config import settings
from mentormatch.crud import user as user_crud
from mentormatch.database import get_db
from mentormatch.schemas.auth import TokenData

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BCRYPT_MAX_BYTES = 72


# ==========================
# PASSWORDS
# ==========================

def _bcrypt_input(password: str) -> str:
    """Bcrypt reads at most 72 bytes; cut on a character boundary."""
    encoded = password.encode("utf-8")
    if len(encoded) <= BCRYPT_MAX_BYTES:
        return password
    return encoded[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(_bcrypt_input(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(_bcrypt_input(plain_password), hashed_password)


def authenticate_user(db: Session, email: str, password: str) -> Optional[models.User]:
    """The user owning ``email`` if ``password`` matches, else None."""
    user = user_crud.get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


# ==========================
# TOKENS
# ==========================

def create_access_token(subject: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": subject,
        "role": role,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[TokenData]:
    """Claims of a valid, unexpired token; None for anything else."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return TokenData(email=payload["sub"], role=payload.get("role"))


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> models.User:
    """FastAPI dependency resolving the bearer token to an active user."""
    token_data = decode_access_token(token)
    user = user_crud.get_user_by_email(db, token_data.email) if token_data else None
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
