# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_db
from storefront.domain.schemas import CheckoutIn, CheckoutOut, Identity
from storefront.services.order_service import OrderService

router = APIRouter(tags=["checkout"])


@router.post("/checkout", response_model=CheckoutOut)
def checkout(payload: CheckoutIn, identity: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Symulacja checkoutu (platnosc mockowana).
    Bledy walidacji -> 400, blad zapisu -> 500, mozna ponowic.
    """
    sale = OrderService(db).checkout(identity.id, payload.items)
    return {"success": True, "order_id": sale.id}
