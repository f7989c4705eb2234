# shopzone/services/product_service.py
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy.orm import Session

from shopzone.data.models.product import ProductModel
from shopzone.domain.errors import NotFound, ValidationError
from shopzone.repos.cart_repo import CartRepo
from shopzone.repos.product_repo import ProductRepo
from shopzone.services.pricing import money
from shopzone.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 100

MAX_PRICE = Decimal("99999999.99")
MAX_STOCK = 2**31 - 1

PRODUCT_FIELDS = ("name", "description", "price", "category", "image", "images", "stock")


def clamp_page(limit: int | None, offset: int | None) -> tuple[int, int]:
    if limit is None or limit < 1:
        limit = DEFAULT_LIMIT
    return min(limit, MAX_LIMIT), max(offset or 0, 0)


def _clean_price(value: Any) -> Decimal:
    try:
        price = Decimal(str(value))
        if not price.is_finite() or price < 0:
            raise ValidationError("price must be zero or more", details={"field": "price"})
        price = money(price)
    except (InvalidOperation, ValueError):
        raise ValidationError("price must be a number", details={"field": "price"})

    # Numeric(10, 2)
    if price > MAX_PRICE:
        raise ValidationError(f"price must be at most {MAX_PRICE}", details={"field": "price"})
    return price


def _clean_stock(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("stock must be a whole number", details={"field": "stock"})
    if value < 0:
        raise ValidationError("stock must be zero or more", details={"field": "stock"})
    if value > MAX_STOCK:
        raise ValidationError(f"stock must be at most {MAX_STOCK}", details={"field": "stock"})
    return value


def _clean_text(value: Any, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} must not be empty", details={"field": field})
    return cleaned


def _optional_text(value: Any) -> str | None:
    return (value or "").strip() or None


class ProductService:
    """
    Catalog use cases.
    Reads are public; create/update/delete are admin-only and gated by the API layer.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)
        self.cart_repo = CartRepo(db)

    # queries
    def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        limit: int | None = DEFAULT_LIMIT,
        offset: int | None = 0,
    ) -> list[ProductModel]:
        if category is not None and category.strip().lower() in ("", "all"):
            category = None
        search = (search or "").strip() or None
        limit, offset = clamp_page(limit, offset)
        return self.repo.list_products(category, search, limit, offset)

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.repo.get_product(product_id)

    def list_categories(self) -> list[str]:
        return self.repo.list_categories()

    # commands
    def create_product(self, fields: dict[str, Any]) -> ProductModel:
        product = ProductModel(
            name=_clean_text(fields.get("name"), "name"),
            description=_optional_text(fields.get("description")),
            price=_clean_price(fields.get("price")),
            category=_clean_text(fields.get("category"), "category"),
            image=_optional_text(fields.get("image")),
            images=fields.get("images"),
            stock=_clean_stock(fields.get("stock", 0)),
        )
        self.repo.add_product(product)
        self.db.commit()

        logger.info(f"Product created: {product.id} ({product.name})")
        return product

    def update_product(self, product_id: str, fields: dict[str, Any]) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found", details={"product_id": product_id})

        # validate everything before touching the row
        changes = {}
        for key, value in fields.items():
            if key not in PRODUCT_FIELDS:
                raise ValidationError(f"Unknown product field {key!r}", details={"field": key})
            if key in ("name", "category"):
                changes[key] = _clean_text(value, key)
            elif key == "price":
                changes[key] = _clean_price(value)
            elif key == "stock":
                changes[key] = _clean_stock(value)
            elif key in ("description", "image"):
                changes[key] = _optional_text(value)
            else:
                changes[key] = value

        for key, value in changes.items():
            setattr(product, key, value)

        self.db.commit()

        logger.info(f"Product updated: {product.id} fields={sorted(fields)}")
        return product

    def delete_product(self, product_id: str) -> bool:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found", details={"product_id": product_id})

        try:
            # carts must never point at a missing product; order items stay
            removed = self.cart_repo.delete_for_product(product_id)
            self.repo.delete_product(product)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Product deleted: {product_id}, removed from {removed} cart(s)")
        return True
