# shopzone/data/seed.py
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from shopzone.data.database import Database
from shopzone.data.models.product import ProductModel
from shopzone.data.models.user import ROLE_ADMIN
from shopzone.services.user_service import UserService
from shopzone.utils import settings
from shopzone.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Wireless Headphones",
        "description": "Noise-cancelling over-ear headphones with 30-hour battery life",
        "price": Decimal("199.99"),
        "category": "electronics",
        "stock": 25,
    },
    {
        "name": "Mechanical Keyboard",
        "description": "Hot-swappable switches, aluminium case",
        "price": Decimal("89.50"),
        "category": "electronics",
        "stock": 40,
    },
    {
        "name": "Cotton T-Shirt",
        "description": "Organic cotton crew neck",
        "price": Decimal("19.00"),
        "category": "clothing",
        "stock": 120,
    },
    {
        "name": "Ceramic Mug",
        "description": "350 ml, dishwasher safe",
        "price": Decimal("12.00"),
        "category": "home",
        "stock": 60,
    },
]


def seed(db: Session, admin_email: str | None = None, admin_password: str | None = None) -> dict:
    """Create the admin account and sample products. Safe to run repeatedly."""
    created = {"admin": False, "products": 0}

    admin_email = admin_email or settings.ADMIN_EMAIL
    admin_password = admin_password or settings.ADMIN_PASSWORD
    users = UserService(db)

    if admin_email and admin_password and not users.find_by_email(admin_email):
        users.create_user(
            admin_email,
            admin_password,
            first_name="Admin",
            last_name="User",
            role=ROLE_ADMIN,
        )
        created["admin"] = True

    # only seed the catalog if empty
    if not db.execute(select(func.count()).select_from(ProductModel)).scalar_one():
        for fields in SAMPLE_PRODUCTS:
            db.add(ProductModel(**fields))
        created["products"] = len(SAMPLE_PRODUCTS)

    db.commit()
    return created


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL)
    database.create_all()
    try:
        with database.session() as db:
            result = seed(db)
        logger.info(f"Seed finished: {result}")
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
