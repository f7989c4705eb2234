# shopzone/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopzone.api.deps import get_current_user
from shopzone.data.database import get_db
from shopzone.data.models.user import UserModel
from shopzone.domain.schemas import CartItemIn, CartItemOut, CartOut, CartQuantityIn
from shopzone.services.cart_service import CartService

# every route works on the caller's own cart; no user id is ever taken from the request
router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).get_cart(user.id)


@router.post("/items", response_model=CartItemOut)
def add_item(
    payload: CartItemIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).add_item(user.id, payload.product_id, payload.quantity)


@router.patch("/items/{product_id}", response_model=CartItemOut | None)
def update_quantity(
    product_id: str,
    payload: CartQuantityIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CartService(db).set_quantity(user.id, product_id, payload.quantity)


@router.delete("/items/{product_id}")
def remove_item(
    product_id: str,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"removed": CartService(db).remove_item(user.id, product_id)}


@router.delete("")
def clear_cart(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"cleared": CartService(db).clear_cart(user.id)}
