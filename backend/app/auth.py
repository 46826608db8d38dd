"""
Authentication and security utilities
- Password hashing with bcrypt
- JWT session token generation and validation
- Bearer-token dependency for protected routes

SECURITY NOTES:
---------------
1. Tokens are stateless and cannot be revoked before expiry. Logout would
   need a server-side denylist keyed on a JTI claim.

2. bcrypt only reads the first 72 bytes of a password, which is why
   registration caps passwords at 72 characters.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext


# Secret key for JWT signing - in production, use a proper secret from env
SECRET_KEY = os.getenv("JWT_SECRET_KEY", "auction-dev-secret-key-change-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))  # 1 hour default

# Password hashing configuration
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# HTTP Bearer scheme for JWT; missing headers are reported by get_current_user
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign an access token; lifetime defaults to ACCESS_TOKEN_EXPIRE_MINUTES"""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta is not None:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "exp": expire,
        "iat": now,
        "type": "access"
    })

    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def session_token_for(user) -> str:
    """Access token identifying a registered user"""
    return create_access_token(data={"sub": str(user.id), "user_id": user.id, "email": user.email})


def decode_token(token: str) -> Optional[dict]:
    """Payload of a valid token, None if invalid or expired"""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Dependency that validates the bearer token and returns its payload.

    The decoded identity is also stored on ``request.state.user``.

    Raises:
        HTTPException 401 if no token was sent
        HTTPException 403 if the token is invalid, expired or not an access token
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access Denied: No Token Provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("type") != "access" or payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid Token"
        )

    request.state.user = payload
    return payload
