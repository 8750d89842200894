# storefront/services/portfolio_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.portfolio import PortfolioModel
from storefront.repos.portfolio_repo import PortfolioRepo


class PortfolioService:
    def __init__(self, db: Session):
        self.repo = PortfolioRepo(db)

    def list_items(self) -> List[PortfolioModel]:
        return self.repo.list_items()
