# storefront/api/routers/reviews.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, get_optional_user, require_admin
from storefront.domain.schemas import Identity, OkOut, ReviewIn, ReviewOut, ReviewUpdateIn
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=List[ReviewOut])
def list_reviews(
    product_id: Optional[int] = Query(None, alias="productId"),
    identity: Identity | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    # admin widzi tez nieopublikowane, do moderacji
    include_unpublished = bool(identity and identity.admin)
    return ReviewService(db).list_reviews(include_unpublished, product_id)


@router.post("", response_model=ReviewOut, status_code=201)
def submit_review(
    payload: ReviewIn,
    identity: Identity | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    return ReviewService(db).submit(payload, identity.id if identity else None)


@router.patch("/{review_id}", response_model=ReviewOut)
def update_review(
    review_id: int,
    payload: ReviewUpdateIn,
    _: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ReviewService(db).update(review_id, payload)


@router.delete("/{review_id}", response_model=OkOut)
def delete_review(review_id: int, _: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    ReviewService(db).delete(review_id)
    return {"ok": True}
