# app/api/deps.py
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.core.security import decode_token
from app.core.exceptions import AuthenticationFailure, ForbiddenError
from app.models.user import User, UserRole
from app.db.session import get_db

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login")

# 1. Resolve the User behind the bearer token
def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    payload = decode_token(token)
    if payload is None:
        raise AuthenticationFailure("Invalid or expired token")

    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        raise AuthenticationFailure("Invalid or expired token")

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise AuthenticationFailure("Invalid or expired token")
    return user

# 2. Reject deactivated accounts
def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_active:
        raise ForbiddenError("Inactive user")
    return current_user

# 3. Role factory
def check_role(allowed_roles: list[UserRole]):
    def role_checker(current_user: User = Depends(get_current_active_user)):
        if current_user.role not in allowed_roles:
            raise ForbiddenError("Not enough permissions")
        return current_user
    return role_checker
