# storefront/repos/cart_repo.py
from sqlalchemy import delete, select, update
from sqlalchemy.orm import selectinload

from storefront.data.models.cart import CART_ACTIVE, CART_CHECKED_OUT, CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.repos.base import BaseRepo


class CartRepo(BaseRepo):
    def _with_items(self):
        return (
            select(CartModel)
            .options(selectinload(CartModel.items).joinedload(CartItemModel.product))
            .execution_options(populate_existing=True)
        )

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.execute(self._with_items().where(CartModel.id == cart_id)).scalar_one_or_none()

    def get_active_cart_by_user(self, user_id: int) -> CartModel | None:
        stmt = self._with_items().where(CartModel.user_id == user_id, CartModel.status == CART_ACTIVE)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.commit("Active cart already exists")
        return self.get_cart(cart.id)

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        stmt = select(CartItemModel).where(
            CartItemModel.cart_id == cart_id,
            CartItemModel.product_id == product_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)

    def clear_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def close_active_carts(self, user_id: int) -> int:
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.user_id == user_id, CartModel.status == CART_ACTIVE)
            .values(status=CART_CHECKED_OUT)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
