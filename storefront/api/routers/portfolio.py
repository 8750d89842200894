# storefront/api/routers/portfolio.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db
from storefront.domain.schemas import PortfolioOut
from storefront.services.portfolio_service import PortfolioService

router = APIRouter(tags=["portfolio"])


@router.get("/portfolio", response_model=List[PortfolioOut])
def list_portfolio(db: Session = Depends(get_db)):
    return PortfolioService(db).list_items()
