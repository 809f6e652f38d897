from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.core import reporting
from app.db.session import get_db
from app.models.user import User
from app.schemas import (
    DailySalesResponse, SalesRangeRow, TopProductRow, OwnerDailySummaryResponse,
)

router = APIRouter()

# Sales of one merchant for a day (today when date is omitted)
@router.get("/daily-sales", response_model=DailySalesResponse)
def get_daily_sales(
    merchant_id: Optional[int] = None,
    date: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    day = reporting.parse_date(date)
    return reporting.daily_sales(db, current_user, merchant_id, day)

@router.get("/sales-range", response_model=List[SalesRangeRow])
def get_sales_range(
    merchant_id: Optional[int] = None,
    from_date: Optional[str] = Query(None, alias="from"),
    to_date: Optional[str] = Query(None, alias="to"),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    start, end = reporting.parse_range(from_date, to_date)
    return reporting.sales_range(db, current_user, merchant_id, start, end)

@router.get("/top-products", response_model=List[TopProductRow])
def get_top_products(
    merchant_id: Optional[int] = None,
    from_date: Optional[str] = Query(None, alias="from"),
    to_date: Optional[str] = Query(None, alias="to"),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    start, end = reporting.parse_range(from_date, to_date)
    return reporting.top_products(db, current_user, merchant_id, start, end)

# Owner reports: no merchant_id, every active merchant of the caller
@router.get("/owner/daily-summary", response_model=OwnerDailySummaryResponse)
def get_owner_daily_summary(
    date: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return reporting.owner_daily_summary(db, current_user, reporting.parse_date(date))

@router.get("/owner/top-products", response_model=List[TopProductRow])
def get_owner_top_products(
    date: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return reporting.owner_top_products(db, current_user, reporting.parse_date(date))
