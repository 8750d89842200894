#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductModel
from storefront.data.models.cart import CartModel, CART_ACTIVE, CART_CHECKED_OUT
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.sale import SaleModel, SaleItemModel
from storefront.data.models.review import ReviewModel
from storefront.data.models.faq import FaqModel
from storefront.data.models.portfolio import PortfolioModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "SaleModel",
    "SaleItemModel",
    "ReviewModel",
    "FaqModel",
    "PortfolioModel",
    "CART_ACTIVE",
    "CART_CHECKED_OUT",
]
