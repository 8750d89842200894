# storefront/api/routers/admin_users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, pagination, require_admin
from storefront.domain.schemas import AdminUserOut, AdminUserUpdateIn, OkOut, ResetPasswordIn, UserPage
from storefront.services.user_service import UserService

router = APIRouter(prefix="/admin/users", tags=["admin"], dependencies=[Depends(require_admin)])


def get_service(db: Session):
    return UserService(db)


@router.get("", response_model=UserPage)
def list_users(search: str = "", page: tuple[int, int] = Depends(pagination), db: Session = Depends(get_db)):
    skip, take = page
    items, total = get_service(db).page_users(search.strip(), skip, take)
    return {"items": items, "total": total, "skip": skip, "take": take}


@router.patch("/{user_id}", response_model=AdminUserOut)
def update_user(user_id: int, payload: AdminUserUpdateIn, db: Session = Depends(get_db)):
    return get_service(db).admin_update(user_id, payload)


@router.post("/{user_id}/reset-password", response_model=OkOut)
def reset_password(user_id: int, payload: ResetPasswordIn, db: Session = Depends(get_db)):
    get_service(db).reset_password(user_id, payload.new_password)
    return {"ok": True}
