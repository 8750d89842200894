# storefront/repos/product_repo.py
from typing import Iterable, List, Tuple

from sqlalchemy import and_, func, or_, select, true, update

from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFound
from storefront.repos.base import BaseRepo, contains_ci, equals_ci


class ProductRepo(BaseRepo):
    def _filters(self, search: str, category: str, include_slug: bool = False):
        conditions = []
        if search:
            columns = [ProductModel.name, ProductModel.description]
            if include_slug:
                columns.append(ProductModel.slug)
            conditions.append(or_(*(contains_ci(c, search) for c in columns)))
        if category:
            conditions.append(equals_ci(ProductModel.category, category))
        return and_(true(), *conditions)

    def list_products(self, search: str = "", category: str = "") -> List[ProductModel]:
        stmt = (
            select(ProductModel)
            .where(self._filters(search, category))
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def page_products(self, search: str, category: str, skip: int, take: int) -> Tuple[List[ProductModel], int]:
        where = self._filters(search, category, include_slug=True)
        items = self.db.execute(
            select(ProductModel)
            .where(where)
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
            .offset(skip)
            .limit(take)
        ).scalars().all()
        total = self.db.execute(select(func.count()).select_from(ProductModel).where(where)).scalar_one()
        return list(items), total

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def require_product(self, product_id: int) -> ProductModel:
        product = self.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    def get_by_slug(self, slug: str) -> ProductModel | None:
        return self.db.execute(select(ProductModel).where(ProductModel.slug == slug)).scalar_one_or_none()

    def get_by_slugs(self, slugs: Iterable[str]) -> List[ProductModel]:
        wanted = set(slugs)
        if not wanted:
            return []
        return list(self.db.execute(select(ProductModel).where(ProductModel.slug.in_(wanted))).scalars().all())

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)

    def decrement_stock(self, product_id: int, qty: int) -> int:
        # warunkowy update: stock nigdy nie zejdzie ponizej zera
        # UPDATE products SET stock = stock - :qty WHERE id = :id AND stock >= :qty
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= qty)
            .values(stock=ProductModel.stock - qty)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
