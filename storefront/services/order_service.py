# storefront/services/order_service.py
from decimal import Decimal
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.sale import SaleItemModel, SaleModel
from storefront.domain.errors import EmptyCart, InsufficientStock, PersistenceFailure, UnknownProduct
from storefront.domain.schemas import CheckoutLineIn
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.sale_repo import SaleRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Checkout: walidacja stanu magazynu + atomowe utworzenie sprzedazy.
    Albo zapisuje sie wszystko (sale, pozycje, stock, status koszyka), albo nic.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = SaleRepo(db)
        self.products = ProductRepo(db)
        self.carts = CartRepo(db)

    def checkout(self, user_id: int, lines: List[CheckoutLineIn]) -> SaleModel:
        """
        1. Pusta lista -> blad
        2. Produkty po slugach jednym zapytaniem, nieznany slug -> blad
        3. Sprawdzenie stocku dla kazdej pozycji
        4. Total z cen odczytanych w kroku 2
        5. Jedna transakcja: sale + pozycje (snapshot ceny) + dekrementacja + zamkniecie koszyka
        """
        if not lines:
            raise EmptyCart()

        by_slug = {p.slug: p for p in self.products.get_by_slugs(line.slug for line in lines)}
        if any(line.slug not in by_slug for line in lines):
            raise UnknownProduct()

        for line in lines:
            product = by_slug[line.slug]
            if product.stock < line.qty:
                logger.warning(f"Checkout usera {user_id}: za malo {product.slug} ({product.stock} < {line.qty})")
                raise InsufficientStock(product.name)

        total = sum((by_slug[line.slug].price * line.qty for line in lines), Decimal("0.00"))

        try:
            sale = self.repo.add_sale(SaleModel(user_id=user_id, total=total))
            self.db.flush()

            for line in lines:
                product = by_slug[line.slug]
                self.db.add(
                    SaleItemModel(
                        sale_id=sale.id,
                        product_id=product.id,
                        qty=line.qty,
                        price=product.price,
                    )
                )

                # rownolegly checkout mogl zjesc stock po sprawdzeniu wyzej
                if self.products.decrement_stock(product.id, line.qty) == 0:
                    raise InsufficientStock(product.name)

            closed = self.carts.close_active_carts(user_id)
            self.db.commit()
        except InsufficientStock:
            self.db.rollback()
            logger.warning(f"Checkout usera {user_id} wycofany: stock zmienil sie w trakcie transakcji")
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Checkout usera {user_id} nieudany, transakcja wycofana: {e}")
            raise PersistenceFailure("Checkout failed") from e

        logger.info(f"Sale {sale.id} utworzona dla usera {user_id}, total {total}, zamknieto koszykow: {closed}")
        return sale
