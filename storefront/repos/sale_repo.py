# storefront/repos/sale_repo.py
from datetime import datetime
from typing import List, Tuple

from sqlalchemy import and_, func, select, true
from sqlalchemy.orm import joinedload, selectinload

from storefront.data.models.sale import SaleItemModel, SaleModel
from storefront.repos.base import BaseRepo


class SaleRepo(BaseRepo):
    def _with_details(self):
        return select(SaleModel).options(
            joinedload(SaleModel.user),
            selectinload(SaleModel.items).joinedload(SaleItemModel.product),
        )

    def add_sale(self, sale: SaleModel) -> SaleModel:
        self.db.add(sale)
        return sale

    def get_sale(self, sale_id: int) -> SaleModel | None:
        return self.db.execute(self._with_details().where(SaleModel.id == sale_id)).scalar_one_or_none()

    def page_sales(
        self,
        date_from: datetime | None,
        date_to: datetime | None,
        user_id: int | None,
        skip: int,
        take: int,
    ) -> Tuple[List[SaleModel], int]:
        conditions = []
        if date_from is not None:
            conditions.append(SaleModel.created_at >= date_from)
        if date_to is not None:
            conditions.append(SaleModel.created_at <= date_to)
        if user_id is not None:
            conditions.append(SaleModel.user_id == user_id)
        where = and_(true(), *conditions)

        items = self.db.execute(
            self._with_details()
            .where(where)
            .order_by(SaleModel.created_at.desc(), SaleModel.id.desc())
            .offset(skip)
            .limit(take)
        ).scalars().all()
        total = self.db.execute(select(func.count()).select_from(SaleModel).where(where)).scalar_one()
        return list(items), total

    def sales_since(self, start: datetime) -> List[Tuple]:
        stmt = (
            select(SaleModel.total, SaleModel.created_at)
            .where(SaleModel.created_at >= start)
            .order_by(SaleModel.created_at.asc())
        )
        return list(self.db.execute(stmt).all())
