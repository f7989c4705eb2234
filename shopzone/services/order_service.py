# shopzone/services/order_service.py
from typing import Any

from sqlalchemy.orm import Session

from shopzone.data.models.order import OrderModel
from shopzone.data.models.order_item import OrderItemModel
from shopzone.data.models.user import UserModel
from shopzone.domain.errors import (
    EmptyCart,
    InsufficientStock,
    InvalidStatusTransition,
    NotAuthorized,
    NotFound,
    ValidationError,
)
from shopzone.domain.order_status import CANCELLED, PENDING, check_transition, normalize_status
from shopzone.repos.cart_repo import CartRepo
from shopzone.repos.order_repo import OrderRepo
from shopzone.repos.product_repo import ProductRepo
from shopzone.services.lock_service import LockService
from shopzone.services.notification_service import (
    ORDER_PLACED,
    ORDER_STATUS_CHANGED,
    NotificationService,
)
from shopzone.services.pricing import compute_totals
from shopzone.utils.logging import get_logger
from shopzone.utils.retry import db_retry

logger = get_logger(__name__)


class OrderService:
    """
    Order domain: checkout (cart -> order) and the order status lifecycle.

    Checkout is the only use case that touches carts, products and orders in
    one unit of work. It runs under a per-user Redis lock and inside a single
    DB transaction; stock is decremented with a conditional UPDATE so it can
    never go below zero, and any failure rolls back the whole order.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_repo = ProductRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service

    # ------------------------------------------------------------ checkout
    def create_order(
        self,
        user_id: str,
        shipping_address: str | dict[str, Any],
        payment_method: str,
    ) -> OrderModel:
        """
        Use case: turn the user's cart into an order.

        1. load cart rows, drop orphans, merge duplicate products
        2. empty -> delete leftover rows, EmptyCart
        3. re-check stock for every line (all-or-nothing)
        4. price at current product prices
        5. insert order + items (frozen unit prices), decrement stock atomically
        6. delete the cart
        """
        if isinstance(shipping_address, str):
            shipping_address = shipping_address.strip()
        if not shipping_address:
            raise ValidationError("shipping_address is required", details={"field": "shipping_address"})

        payment_method = (payment_method or "").strip()
        if not payment_method:
            raise ValidationError("payment_method is required", details={"field": "payment_method"})

        with self.lock_service.checkout_lock(user_id):
            order = self._checkout(user_id, shipping_address, payment_method)

        logger.info(
            f"Order {order.id} created for user {user_id}: "
            f"{len(order.items)} item(s), total {order.total}"
        )
        self._notify(user_id, order.id, ORDER_PLACED, total=str(order.total))
        return order

    @db_retry()
    def _checkout(self, user_id: str, shipping_address, payment_method: str) -> OrderModel:
        try:
            return self._run_checkout(user_id, shipping_address, payment_method)
        except Exception:
            self.db.rollback()
            raise

    def _run_checkout(self, user_id: str, shipping_address, payment_method: str) -> OrderModel:
        cart_items = self.cart_repo.get_cart_items(user_id)
        products = self.product_repo.get_products(i.product_id for i in cart_items)

        # orphans dropped, duplicate product rows merged (insertion order kept)
        wanted: dict[str, int] = {}
        for item in cart_items:
            if item.product_id not in products:
                continue
            wanted[item.product_id] = wanted.get(item.product_id, 0) + item.quantity

        if not wanted:
            if cart_items:
                self.cart_repo.delete_items({i.id for i in cart_items})
                self.db.commit()
                logger.info(f"Discarded {len(cart_items)} orphan cart item(s) of user {user_id}")
            raise EmptyCart()

        for product_id, quantity in wanted.items():
            product = products[product_id]
            if product.stock < quantity:
                logger.warning(
                    f"Checkout rejected for user {user_id}: product {product_id} "
                    f"has {product.stock}, wanted {quantity}"
                )
                raise InsufficientStock(product.id, product.name, product.stock, quantity)

        totals = compute_totals(
            (products[pid].price, qty) for pid, qty in wanted.items()
        )

        order = OrderModel(
            user_id=user_id,
            status=PENDING,
            subtotal=totals.subtotal,
            tax=totals.tax,
            shipping=totals.shipping,
            total=totals.total,
            shipping_address=shipping_address,
            payment_method=payment_method,
            items=[
                OrderItemModel(
                    product_id=pid,
                    quantity=qty,
                    price=products[pid].price,
                    product_snapshot=products[pid].snapshot(),
                )
                for pid, qty in wanted.items()
            ],
        )
        self.repo.create_order(order)

        for product_id, quantity in wanted.items():
            if self.product_repo.decrement_stock(product_id, quantity) == 0:
                # someone bought it between the check above and here
                product = products[product_id]
                available = self.product_repo.current_stock(product_id) or 0
                raise InsufficientStock(product.id, product.name, available, quantity)

        deleted = self.cart_repo.clear_cart(user_id)
        if deleted < len({i.id for i in cart_items}):
            # a concurrent checkout already consumed these rows
            raise EmptyCart("Cart was already checked out")

        self.db.commit()

        for product in products.values():
            self.db.expire(product)

        return order

    # ------------------------------------------------------------ queries
    def get_order(self, caller: UserModel, order_id: str) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found", details={"order_id": order_id})
        if order.user_id != caller.id and not caller.is_admin:
            raise NotAuthorized()
        return order

    def list_orders(self, user_id: str) -> list[OrderModel]:
        return self.repo.list_for_user(user_id)

    def list_all_orders(self, status: str | None = None) -> list[OrderModel]:
        if status:
            status = normalize_status(status)
        return self.repo.list_all(status)

    # ------------------------------------------------------------ status
    def update_order_status(self, caller: UserModel, order_id: str, status: str) -> OrderModel:
        target = normalize_status(status)

        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found", details={"order_id": order_id})

        current = order.status
        check_transition(
            current,
            target,
            is_admin=caller.is_admin,
            is_owner=order.user_id == caller.id,
        )

        try:
            if self.repo.transition_status(order.id, current, target) == 0:
                raise InvalidStatusTransition(
                    "Order status was changed by another request",
                    details={"current": current, "target": target},
                )

            if target == CANCELLED:
                # stock held by a cancelled order goes back on sale
                for item in order.items:
                    self.product_repo.increment_stock(item.product_id, item.quantity)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        order = self.repo.get_order(order.id)
        logger.info(f"Order {order.id}: {current} -> {target} by user {caller.id}")
        self._notify(order.user_id, order.id, ORDER_STATUS_CHANGED, status=target)
        return order

    def cancel_order(self, caller: UserModel, order_id: str) -> OrderModel:
        return self.update_order_status(caller, order_id, CANCELLED)

    def _notify(self, user_id: str, order_id: str, event: str, **extra) -> None:
        if not self.notification_service:
            return
        try:
            self.notification_service.send_order_notification(user_id, order_id, event, **extra)
        except Exception:
            # the order is already committed; a lost notification must not fail it
            logger.exception(f"Failed to dispatch {event} notification for order {order_id}")
