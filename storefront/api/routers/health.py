# storefront/api/routers/health.py
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db
from storefront.domain.schemas import HealthOut, StatsBucketOut
from storefront.services.sale_service import SaleService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health():
    return {"status": "ok", "time": datetime.now(timezone.utc)}


@router.get("/stats", response_model=List[StatsBucketOut])
def stats(db: Session = Depends(get_db)):
    """Sprzedaz z 6 ostatnich miesiecy, do wykresu w panelu admina."""
    return SaleService(db).monthly_stats()
