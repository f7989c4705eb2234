# shopzone/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shopzone.api.deps import get_current_user, get_lock_service, get_notification_service, require_admin
from shopzone.data.database import get_db
from shopzone.data.models.user import UserModel
from shopzone.domain.schemas import OrderCreate, OrderOut, OrderStatusIn
from shopzone.services.lock_service import LockService
from shopzone.services.notification_service import NotificationService
from shopzone.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> OrderService:
    return OrderService(db, lock_service, notification_service)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    """
    Checkout: turns the caller's cart into an order.
    The notification is sent asynchronously.
    """
    return svc.create_order(user.id, payload.shipping_address, payload.payment_method)


@router.get("", response_model=List[OrderOut])
def list_orders(
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders(user.id)


@router.get("/all", response_model=List[OrderOut])
def list_all_orders(
    status: str | None = Query(None),
    admin: UserModel = Depends(require_admin),
    svc: OrderService = Depends(get_service),
):
    return svc.list_all_orders(status)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    return svc.get_order(user, order_id)


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_order_status(
    order_id: str,
    payload: OrderStatusIn,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    """Owners may only cancel; every other transition needs an admin."""
    return svc.update_order_status(user, order_id, payload.status)
