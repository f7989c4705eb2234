# shopzone/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shopzone.api.deps import require_admin
from shopzone.data.database import get_db
from shopzone.data.models.user import UserModel
from shopzone.domain.errors import NotFound
from shopzone.domain.schemas import ProductCreate, ProductOut, ProductUpdate
from shopzone.services.product_service import DEFAULT_LIMIT, ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(
    category: str | None = Query(None),
    search: str | None = Query(None),
    limit: int = Query(DEFAULT_LIMIT),
    offset: int = Query(0),
    db: Session = Depends(get_db),
):
    return ProductService(db).list_products(category, search, limit, offset)


@router.get("/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)):
    return ProductService(db).list_categories()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, db: Session = Depends(get_db)):
    product = ProductService(db).get_product(product_id)
    if not product:
        raise NotFound("Product not found", details={"product_id": product_id})
    return product


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).create_product(payload.model_dump())


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).update_product(product_id, payload.model_dump(exclude_unset=True))


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    admin: UserModel = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return {"deleted": ProductService(db).delete_product(product_id)}
