# storefront/api/routers/users.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_db
from storefront.data.models.user import UserModel
from storefront.domain.schemas import Identity, LoginIn, OkOut, ProfileUpdateIn, RegisterIn, UserEnvelope
from storefront.services.user_service import UserService
from storefront.utils.security import create_access_token
from storefront.utils.settings import COOKIE_NAME, COOKIE_SECURE, TOKEN_TTL_SECONDS

router = APIRouter(tags=["users"])


def get_service(db: Session):
    return UserService(db)


def set_auth_cookie(response: Response, user: UserModel) -> None:
    token = create_access_token(user.id, user.email, user.admin)
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=TOKEN_TTL_SECONDS,
        path="/",
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="none" if COOKIE_SECURE else "lax",
    )


def clear_auth_cookie(response: Response) -> None:
    # token nie jest uniewazniany po stronie serwera, znika tylko kopia klienta
    response.delete_cookie(
        key=COOKIE_NAME,
        path="/",
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="none" if COOKIE_SECURE else "lax",
    )


@router.post("/register", response_model=UserEnvelope, status_code=201)
def register(payload: RegisterIn, response: Response, db: Session = Depends(get_db)):
    user = get_service(db).register(payload)
    set_auth_cookie(response, user)
    return {"user": user}


@router.post("/login", response_model=UserEnvelope)
def login(payload: LoginIn, response: Response, db: Session = Depends(get_db)):
    user = get_service(db).login(payload)
    set_auth_cookie(response, user)
    return {"user": user}


@router.get("/me", response_model=UserEnvelope)
def me(identity: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"user": get_service(db).get_user(identity.id)}


@router.patch("/me", response_model=UserEnvelope)
def update_me(
    payload: ProfileUpdateIn,
    response: Response,
    identity: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user, email_changed = get_service(db).update_profile(identity.id, payload)
    if email_changed:
        set_auth_cookie(response, user)
    return {"user": user}


@router.post("/logout", response_model=OkOut)
def logout(response: Response):
    clear_auth_cookie(response)
    return {"ok": True}
