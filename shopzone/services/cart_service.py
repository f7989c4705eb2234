# shopzone/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopzone.data.models.cart_item import CartItemModel
from shopzone.domain.errors import InsufficientStock, NotFound, ValidationError
from shopzone.repos.cart_repo import CartRepo
from shopzone.repos.product_repo import ProductRepo
from shopzone.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases. A cart is simply every CartItem row of one user,
    at most one row per (user, product).

    commands (add, set quantity, remove, clear) change state
    get_cart reads, but also deletes orphan rows it runs into
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    # query
    def get_cart(self, user_id: str) -> Dict[str, Any]:
        items = self.repo.get_cart_items(user_id)
        products = self.products.get_products(i.product_id for i in items)

        lines = []
        orphans = []
        for item in items:
            product = products.get(item.product_id)
            if product is None:
                orphans.append(item.id)
                continue
            lines.append(
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "product": product,
                    "line_total": product.price * item.quantity,
                }
            )

        if orphans:
            self.repo.delete_items(orphans)
            self.db.commit()
            logger.info(f"Removed {len(orphans)} orphan cart item(s) for user {user_id}")

        return {
            "items": lines,
            "item_count": sum(line["quantity"] for line in lines),
            "subtotal": sum((line["line_total"] for line in lines), Decimal("0.00")),
        }

    # commands
    def add_item(self, user_id: str, product_id: str, quantity: int) -> CartItemModel:
        if quantity is None or quantity < 1:
            raise ValidationError("Quantity must be greater than 0", details={"field": "quantity"})

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found", details={"product_id": product_id})

        if product.stock < quantity:
            raise InsufficientStock(product.id, product.name, product.stock, quantity)

        try:
            item = self._add_or_increment(user_id, product_id, quantity)
            self.db.commit()
        except IntegrityError:
            # a concurrent request inserted the same (user, product) row first
            self.db.rollback()
            logger.info(f"Cart row for product {product_id} appeared concurrently, incrementing")
            item = self._add_or_increment(user_id, product_id, quantity)
            self.db.commit()

        return item

    def _add_or_increment(self, user_id: str, product_id: str, quantity: int) -> CartItemModel:
        existing = self.repo.get_cart_item(user_id, product_id)

        if existing:
            logger.info(
                f"Product {product_id} already in cart of user {user_id}, "
                f"quantity {existing.quantity} -> {existing.quantity + quantity}"
            )
            existing.quantity += quantity
            self.db.flush()
            return existing

        logger.info(f"Adding product {product_id} to cart of user {user_id}")
        return self.repo.add_cart_item(
            CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
        )

    def set_quantity(self, user_id: str, product_id: str, quantity: int) -> CartItemModel | None:
        item = self.repo.get_cart_item(user_id, product_id)
        if not item:
            raise NotFound("Cart item not found", details={"product_id": product_id})

        if quantity <= 0:
            self.remove_item(user_id, product_id)
            return None

        item.quantity = quantity
        self.db.commit()
        return item

    def remove_item(self, user_id: str, product_id: str) -> bool:
        self.repo.delete_cart_item(user_id, product_id)
        self.db.commit()
        logger.info(f"Removed product {product_id} from cart of user {user_id}")
        return True

    def clear_cart(self, user_id: str) -> bool:
        removed = self.repo.clear_cart(user_id)
        self.db.commit()
        logger.info(f"Cleared cart of user {user_id} ({removed} item(s))")
        return True
