# storefront/api/routers/faqs.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, get_optional_user, require_admin
from storefront.domain.schemas import FaqIn, FaqOut, FaqUpdateIn, Identity, OkOut
from storefront.services.faq_service import FaqService

router = APIRouter(prefix="/faqs", tags=["faqs"])


@router.get("", response_model=List[FaqOut])
def list_faqs(identity: Identity | None = Depends(get_optional_user), db: Session = Depends(get_db)):
    return FaqService(db).list_faqs(include_unpublished=bool(identity and identity.admin))


@router.post("", response_model=FaqOut, status_code=201, dependencies=[Depends(require_admin)])
def create_faq(payload: FaqIn, db: Session = Depends(get_db)):
    return FaqService(db).create(payload)


@router.patch("/{faq_id}", response_model=FaqOut, dependencies=[Depends(require_admin)])
def update_faq(faq_id: int, payload: FaqUpdateIn, db: Session = Depends(get_db)):
    return FaqService(db).update(faq_id, payload)


@router.delete("/{faq_id}", response_model=OkOut, dependencies=[Depends(require_admin)])
def delete_faq(faq_id: int, db: Session = Depends(get_db)):
    FaqService(db).delete(faq_id)
    return {"ok": True}
