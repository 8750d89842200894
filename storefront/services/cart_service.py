# storefront/services/cart_service.py
from typing import Iterable

from sqlalchemy.orm import Session

from storefront.data.models.cart import CART_ACTIVE, CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import NotFound, UniqueConstraintViolation
from storefront.domain.schemas import CartItemIn
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_CONCURRENT_EDIT = "Cart was modified concurrently, please retry"


class CartService:
    """
    Use case'y dla koszyka zalogowanego usera.
    Zawsze pracujemy na jedynym ACTIVE koszyku, tworzonym leniwie.
    Kazda komenda zwraca odswiezony koszyk z produktami.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query
    def get_cart(self, user_id: int) -> CartModel:
        return self.get_or_create_active_cart(user_id)

    def get_or_create_active_cart(self, user_id: int) -> CartModel:
        existing = self.repo.get_active_cart_by_user(user_id)
        if existing:
            return existing

        try:
            created = self.repo.create_cart(CartModel(user_id=user_id, status=CART_ACTIVE))
        except UniqueConstraintViolation:
            # rownolegle zapytanie zdazylo utworzyc koszyk, bierzemy jego
            existing = self.repo.get_active_cart_by_user(user_id)
            if existing is None:
                raise
            return existing

        logger.info(f"Utworzono nowy koszyk {created.id} dla uzytkownika {user_id}")
        return created

    #commands
    def add_item(self, user_id: int, product_id: int, qty: int) -> CartModel:
        qty = max(1, qty)
        self.products.require_product(product_id)
        cart = self.get_or_create_active_cart(user_id)

        self._add_quantity(cart.id, product_id, qty)
        self.repo.commit(_CONCURRENT_EDIT)

        return self.repo.get_cart(cart.id)

    def set_qty(self, user_id: int, product_id: int, qty: int) -> CartModel:
        cart = self.get_or_create_active_cart(user_id)

        item = self.repo.get_cart_item(cart.id, product_id)
        if not item:
            raise NotFound("Cart item not found")

        item.qty = max(1, qty)
        self.repo.commit()
        logger.info(f"Koszyk {cart.id}: produkt {product_id} ilosc ustawiona na {item.qty}")

        return self.repo.get_cart(cart.id)

    def remove_item(self, user_id: int, product_id: int) -> CartModel:
        cart = self.get_or_create_active_cart(user_id)

        item = self.repo.get_cart_item(cart.id, product_id)
        if not item:
            raise NotFound("Cart item not found")

        self.repo.delete_cart_item(item)
        self.repo.commit()
        logger.info(f"Usunieto produkt {product_id} z koszyka {cart.id}")

        return self.repo.get_cart(cart.id)

    def clear(self, user_id: int) -> CartModel:
        cart = self.get_or_create_active_cart(user_id)
        removed = self.repo.clear_items(cart.id)
        self.repo.commit()
        logger.info(f"Koszyk {cart.id} wyczyszczony ({removed} pozycji)")
        return self.repo.get_cart(cart.id)

    def merge(self, user_id: int, guest_items: Iterable[CartItemIn]) -> CartModel:
        """
        Scala koszyk goscia (trzymany po stronie klienta) z aktywnym koszykiem.
        Ilosci dla tego samego produktu sa sumowane, nieznane produkty pomijane.
        """
        cart = self.get_or_create_active_cart(user_id)

        merged = 0
        for line in guest_items:
            if not self.products.get_product(line.product_id):
                logger.warning(f"Merge koszyka {cart.id}: pomijam nieznany produkt {line.product_id}")
                continue
            self._add_quantity(cart.id, line.product_id, max(1, line.qty))
            # flush po kazdej linii, zeby duplikaty w liscie goscia trafily w ten sam wiersz
            self.repo.flush(_CONCURRENT_EDIT)
            merged += 1

        self.repo.commit(_CONCURRENT_EDIT)
        logger.info(f"Scalono {merged} pozycji koszyka goscia do koszyka {cart.id}")

        return self.repo.get_cart(cart.id)

    def _add_quantity(self, cart_id: int, product_id: int, qty: int) -> CartItemModel:
        existing_item = self.repo.get_cart_item(cart_id, product_id)

        if existing_item:
            logger.info(
                f"Produkt {product_id} juz jest w koszyku {cart_id}, zwiekszam ilosc "
                f"z {existing_item.qty} do {existing_item.qty + qty}"
            )
            existing_item.qty += qty
            return existing_item

        logger.info(f"Dodaje nowy produkt {product_id} do koszyka {cart_id}")
        return self.repo.add_cart_item(CartItemModel(cart_id=cart_id, product_id=product_id, qty=qty))
