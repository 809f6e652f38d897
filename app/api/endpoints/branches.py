from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.api import deps
from app.core import catalog
from app.core.ownership import get_owned_entity
from app.db.session import get_db
from app.models.catalog import Branch
from app.models.user import User
from app.schemas import BranchCreate, BranchUpdate, BranchResponse, BranchDeactivated

router = APIRouter()

# GET /api/branches?merchant_id=1 (active only)
@router.get("", response_model=List[BranchResponse])
def list_branches(
    merchant_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return catalog.list_entities(db, current_user, Branch, merchant_id)

@router.get("/{branch_id}", response_model=BranchResponse)
def read_branch(
    branch_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return get_owned_entity(db, current_user, Branch, branch_id)

@router.post("", response_model=BranchResponse, status_code=status.HTTP_201_CREATED)
def create_branch(
    branch_in: BranchCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return catalog.create_entity(db, current_user, Branch, branch_in)

@router.put("/{branch_id}", response_model=BranchResponse)
def update_branch(
    branch_id: int,
    branch_in: BranchUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return catalog.update_entity(db, current_user, Branch, branch_id, branch_in)

@router.delete("/{branch_id}", response_model=BranchDeactivated)
def delete_branch(
    branch_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    branch = catalog.deactivate_entity(db, current_user, Branch, branch_id)
    return {"message": "Branch deactivated", "branch": branch}
