# storefront/api/routers/admin_products.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, pagination, require_admin
from storefront.domain.schemas import OkOut, ProductCreateIn, ProductOut, ProductPage, ProductUpdateIn
from storefront.services.product_service import ProductService

# caly modul tylko dla zalogowanego admina
router = APIRouter(prefix="/admin/products", tags=["admin"], dependencies=[Depends(require_admin)])


def get_service(db: Session):
    return ProductService(db)


@router.get("", response_model=ProductPage)
def list_products(
    search: str = "",
    category: str = "",
    page: tuple[int, int] = Depends(pagination),
    db: Session = Depends(get_db),
):
    skip, take = page
    items, total = get_service(db).page_products(search, category, skip, take)
    return {"items": items, "total": total, "skip": skip, "take": take}


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return get_service(db).get_product(product_id)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(payload: ProductCreateIn, db: Session = Depends(get_db)):
    return get_service(db).create_product(payload)


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, payload: ProductUpdateIn, db: Session = Depends(get_db)):
    return get_service(db).update_product(product_id, payload)


@router.delete("/{product_id}", response_model=OkOut)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    get_service(db).delete_product(product_id)
    return {"ok": True}
