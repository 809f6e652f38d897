import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.models.user import UserRole, User
from app.schemas import UserCreate, UserResponse, UserUpdate, UserDeactivated
from app.api import deps
from app.core.security import get_password_hash
from app.db.session import get_db

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_manageable_user(db: Session, user_id: int, current_user: User) -> User:
    # Owners manage only themselves; admins manage everyone
    if current_user.role != UserRole.admin and current_user.id != user_id:
        raise HTTPException(status_code=403, detail="Not authorized")

    user = db.query(User).filter(User.id == user_id, User.active()).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found or inactive")
    return user

# Registration (no token required)
@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
):
    if db.query(User).filter(User.email == user_in.email).first():
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = User(
        full_name=user_in.full_name,
        email=user_in.email,
        password_hash=get_password_hash(user_in.password),
        # Self-registration always yields an owner account
        role=UserRole.owner,
        is_active=True,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("User %s registered", new_user.id)
    return new_user

@router.get("/me", response_model=UserResponse)
def read_user_me(
    current_user: User = Depends(deps.get_current_active_user),
):
    return current_user

@router.get("", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.check_role([UserRole.admin])),
):
    return db.query(User).filter(User.active()).order_by(User.id).all()

@router.get("/{user_id}", response_model=UserResponse)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    return _get_manageable_user(db, user_id, current_user)

@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    user = _get_manageable_user(db, user_id, current_user)

    update_data = {k: v for k, v in user_in.model_dump(exclude_unset=True).items() if v is not None}

    if "role" in update_data and current_user.role != UserRole.admin:
        raise HTTPException(status_code=403, detail="Only admins can change roles")

    if "email" in update_data and update_data["email"] != user.email:
        if db.query(User).filter(User.email == update_data["email"]).first():
            raise HTTPException(status_code=400, detail="Email already registered")

    password = update_data.pop("password", None)
    if password:
        user.password_hash = get_password_hash(password)

    for field, value in update_data.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user

# Soft delete (is_active = false)
@router.delete("/{user_id}", response_model=UserDeactivated)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
):
    user = _get_manageable_user(db, user_id, current_user)
    user.deactivate()
    db.commit()
    db.refresh(user)
    logger.info("User %s deactivated by %s", user.id, current_user.id)
    return {"message": "User deactivated", "user": user}
