# storefront/services/product_service.py
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFound, ValidationFailed
from storefront.domain.schemas import ProductCreateIn, ProductUpdateIn
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SLUG_TAKEN = "Slug already in use"


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self, search: str = "", category: str = "") -> List[ProductModel]:
        return self.repo.list_products(search.strip(), category.strip())

    def get_by_slug(self, slug: str) -> ProductModel:
        product = self.repo.get_by_slug(slug)
        if not product:
            raise NotFound("Not found")
        return product

    # admin

    def page_products(self, search: str, category: str, skip: int, take: int) -> Tuple[List[ProductModel], int]:
        return self.repo.page_products(search.strip(), category.strip(), skip, take)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    def create_product(self, payload: ProductCreateIn) -> ProductModel:
        self._check_values(payload.price, payload.stock)

        product = self.repo.add_product(ProductModel(**payload.model_dump()))
        self.repo.commit(SLUG_TAKEN)
        logger.info(f"Utworzono produkt {product.id} ({product.slug})")
        return product

    def update_product(self, product_id: int, payload: ProductUpdateIn) -> ProductModel:
        product = self.get_product(product_id)
        data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        self._check_values(data.get("price"), data.get("stock"))

        for field, value in data.items():
            setattr(product, field, value)

        self.repo.commit(SLUG_TAKEN)
        logger.info(f"Zaktualizowano produkt {product.id}: {sorted(data)}")
        return product

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)
        self.repo.delete_product(product)
        self.repo.commit("Product is referenced by existing sales")
        logger.info(f"Usunieto produkt {product_id}")

    @staticmethod
    def _check_values(price: Decimal | None, stock: int | None) -> None:
        if price is not None and price < 0:
            raise ValidationFailed("price must be >= 0")
        if stock is not None and stock < 0:
            raise ValidationFailed("stock must be >= 0")
