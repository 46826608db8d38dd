"""
Authentication Router
Endpoints for user registration and login
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.database import get_db
from app.models import User
from app.schemas import (
    UserRegisterRequest, UserLoginRequest, RegistrationResponse, LoginResponse
)
from app.auth import (
    hash_password, verify_password, session_token_for, ACCESS_TOKEN_EXPIRE_MINUTES
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/register", response_model=RegistrationResponse)
async def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Fails with 400 if the email is already in use.
    """
    existing_user = db.query(User).filter(User.email == request.email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already in use."
        )

    try:
        new_user = User(
            email=request.email,
            password=hash_password(request.password)
        )
        db.add(new_user)
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already in use."
        )

    logger.info(f"New user registered: {request.email}")
    return RegistrationResponse(success=True, message="User registered successfully!")


@router.post("/login", response_model=LoginResponse)
async def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return a JWT session token valid for one hour.
    """
    user = db.query(User).filter(User.email == request.email).first()
    if not user:
        logger.info(f"Login failed, unknown email: {request.email}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User not found."
        )

    if not verify_password(request.password, user.password):
        logger.info(f"Login failed, bad password for user {user.id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials."
        )

    token = session_token_for(user)
    logger.info(f"User {user.id} logged in")

    return LoginResponse(
        success=True,
        token=token,
        token_type="bearer",
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60
    )
