# shopzone/repos/cart_repo.py
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from shopzone.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_items(self, user_id: str) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.user_id == user_id)
                .order_by(CartItemModel.created_at.desc(), CartItemModel.id)
                .execution_options(populate_existing=True)
            ).scalars()
        )

    def get_cart_item(self, user_id: str, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, user_id: str, product_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        )
        return result.rowcount

    def delete_items(self, item_ids) -> int:
        ids = list(item_ids)
        if not ids:
            return 0
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.id.in_(ids))
        )
        return result.rowcount

    def clear_cart(self, user_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount

    def delete_for_product(self, product_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.product_id == product_id)
        )
        return result.rowcount
