# storefront/api/routers/admin_sales.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, pagination, require_admin
from storefront.domain.schemas import SaleOut, SalePage
from storefront.services.sale_service import SaleService

router = APIRouter(prefix="/admin/sales", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("", response_model=SalePage)
def list_sales(
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    user_id: Optional[int] = Query(None, alias="userId"),
    page: tuple[int, int] = Depends(pagination),
    db: Session = Depends(get_db),
):
    skip, take = page
    items, total = SaleService(db).page_sales(date_from, date_to, user_id, skip, take)
    return {"items": items, "total": total, "skip": skip, "take": take}


@router.get("/{sale_id}", response_model=SaleOut)
def get_sale(sale_id: int, db: Session = Depends(get_db)):
    return SaleService(db).get_sale(sale_id)
