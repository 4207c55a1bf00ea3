# mentormatch/api/auth.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mentormatch.crud import user as user_crud
from mentormatch.database import get_db
from mentormatch.exceptions import ServiceError
from mentormatch.schemas.auth import LoginRequest, RegisterRequest, Token
from mentormatch.utils.security import authenticate_user, create_access_token, get_password_hash

logger = logging.getLogger(__name__)

# The prefix "/auth" ensures this router handles "POST /auth/register"
router = APIRouter(prefix="/auth", tags=["Authentication"])


# ===== REGISTER ENDPOINT =====

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    user_data: RegisterRequest,
    db: Session = Depends(get_db)
):
    """Register a new user. Everyone starts as a mentee."""

    if user_crud.get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=400,
            detail="Email already registered"
        )

    try:
        new_user = user_crud.create_user(
            db,
            name=user_data.name.strip(),
            email=user_data.email,
            password_hash=get_password_hash(user_data.password),
            about=user_data.about,
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration failed for %s", user_data.email)
        raise ServiceError()

    db.refresh(new_user)
    logger.info("Registered user %s", new_user.id)

    return {
        "success": True,
        "message": "Registration successful",
        "userId": new_user.id,
        "email": new_user.email,
        "role": new_user.role,
    }


# ===== LOGIN ENDPOINT =====

@router.post("/login", response_model=Token)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """Verify credentials and return access token"""

    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=401,
            detail="Invalid email or password"
        )

    access_token = create_access_token(user.email, user.role)

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "role": user.role
    }
