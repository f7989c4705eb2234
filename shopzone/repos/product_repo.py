# shopzone/repos/product_repo.py
from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from shopzone.data.models.product import ProductModel
from shopzone.utils.time_utils import utcnow


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id, populate_existing=True)

    def get_products(self, product_ids) -> dict[str, ProductModel]:
        ids = list(set(product_ids))
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel)
            .where(ProductModel.id.in_(ids))
            .execution_options(populate_existing=True)
        ).scalars()
        return {p.id: p for p in rows}

    def list_products(
        self,
        category: str | None,
        search: str | None,
        limit: int,
        offset: int,
    ) -> list[ProductModel]:
        stmt = select(ProductModel)

        if category:
            stmt = stmt.where(ProductModel.category == category)

        if search:
            term = search.lower()
            stmt = stmt.where(
                or_(
                    func.lower(ProductModel.name).contains(term, autoescape=True),
                    func.lower(func.coalesce(ProductModel.description, "")).contains(
                        term, autoescape=True
                    ),
                )
            )

        stmt = (
            stmt.order_by(ProductModel.created_at.desc(), ProductModel.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.execute(stmt).scalars())

    def list_categories(self) -> list[str]:
        rows = self.db.execute(
            select(ProductModel.category).distinct().order_by(ProductModel.category)
        ).scalars()
        return list(rows)

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.flush()

    def decrement_stock(self, product_id: str, quantity: int) -> int:
        """
        Atomic conditional decrement.

        UPDATE products SET stock = stock - :q WHERE id = :id AND stock >= :q
        Returns the affected row count: 0 means the stock was not there.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def increment_stock(self, product_id: str, quantity: int) -> int:
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock=ProductModel.stock + quantity, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def current_stock(self, product_id: str) -> int | None:
        return self.db.execute(
            select(ProductModel.stock).where(ProductModel.id == product_id)
        ).scalar_one_or_none()
