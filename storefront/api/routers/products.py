# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db
from storefront.domain.schemas import ProductOut
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(search: str = "", category: str = "", db: Session = Depends(get_db)):
    return ProductService(db).list_products(search, category)


@router.get("/{slug}", response_model=ProductOut)
def get_product(slug: str, db: Session = Depends(get_db)):
    return ProductService(db).get_by_slug(slug)
