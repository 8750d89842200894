# storefront/repos/portfolio_repo.py
from typing import List

from sqlalchemy import select

from storefront.data.models.portfolio import PortfolioModel
from storefront.repos.base import BaseRepo


class PortfolioRepo(BaseRepo):
    def list_items(self) -> List[PortfolioModel]:
        stmt = select(PortfolioModel).order_by(PortfolioModel.created_at.desc(), PortfolioModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())
