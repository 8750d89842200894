# storefront/api/routers/cart.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_db
from storefront.domain.schemas import CartItemIn, CartOut, Identity
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartOut)
def get_cart(identity: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).get_cart(identity.id)


@router.post("/add", response_model=CartOut)
def add_item(payload: CartItemIn, identity: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).add_item(identity.id, payload.product_id, payload.qty)


@router.patch("/qty", response_model=CartOut)
def set_qty(payload: CartItemIn, identity: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).set_qty(identity.id, payload.product_id, payload.qty)


@router.delete("/item/{product_id}", response_model=CartOut)
def remove_item(product_id: int, identity: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).remove_item(identity.id, product_id)


@router.delete("/clear", response_model=CartOut)
def clear_cart(identity: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_service(db).clear(identity.id)


@router.post("/merge", response_model=CartOut)
def merge_cart(
    payload: List[CartItemIn],
    identity: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Koszyk goscia (localStorage) dolaczany po zalogowaniu."""
    return get_service(db).merge(identity.id, payload)
