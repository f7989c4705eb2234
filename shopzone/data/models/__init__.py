# import all models so SQLAlchemy registers them in Base.metadata

from shopzone.data.models.user import UserModel
from shopzone.data.models.product import ProductModel
from shopzone.data.models.cart_item import CartItemModel
from shopzone.data.models.order import OrderModel
from shopzone.data.models.order_item import OrderItemModel
from shopzone.data.models.address import AddressModel
from shopzone.data.models.session_token import SessionTokenModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "AddressModel",
    "SessionTokenModel",
]
