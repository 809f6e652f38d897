import jwt
from datetime import datetime, timedelta, timezone
from typing import Any, Union, Optional
from passlib.context import CryptContext
from app.core.config import settings

# bcrypt for password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def create_access_token(
    subject: Union[str, Any],
    email: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Issue a signed JWT for the given user id.
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode = {
        "exp": expire,
        "sub": str(subject),
        "email": email,
        "role": role,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a password against its hash; never raises.
    """
    try:
        # bcrypt only looks at the first 72 bytes
        return pwd_context.verify(plain_password[:72], hashed_password)
    except (ValueError, TypeError):
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password[:72])

def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a token. Returns None when it is invalid or expired.
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except jwt.PyJWTError:
        return None
