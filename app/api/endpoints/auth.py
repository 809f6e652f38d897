import logging
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core import security
from app.db.session import get_db
from app.models.user import User
from app.schemas import LoginRequest, LoginResponse

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/login", response_model=LoginResponse)
def login(
    login_in: LoginRequest,
    db: Session = Depends(get_db),
) -> Any:
    if not login_in.email or not login_in.password:
        raise HTTPException(status_code=400, detail="email and password are required")

    # 1. Look up the user
    user = db.query(User).filter(User.email == login_in.email).first()

    # Unknown email and wrong password answer the same way
    if not user or not security.verify_password(login_in.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    # 2. Deactivated accounts cannot log in
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive, contact the administrator",
        )

    # 3. Issue the access token
    token = security.create_access_token(
        subject=user.id,
        email=user.email,
        role=user.role.value,
    )
    logger.info("Token issued for user %s", user.id)

    return {
        "message": "Login successful",
        "user": user,
        "token": token,
    }
