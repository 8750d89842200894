# storefront/api/deps.py
from typing import Iterator

from fastapi import Depends, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from storefront.domain.errors import Forbidden, Unauthenticated
from storefront.domain.schemas import Identity
from storefront.utils.security import decode_access_token
from storefront.utils.settings import COOKIE_NAME, DEFAULT_TAKE, MAX_TAKE


def get_db(request: Request) -> Iterator[Session]:
    # sesja na request z uchwytu Database utworzonego przy starcie aplikacji
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def _identity_from_token(token: str) -> Identity | None:
    claims = decode_access_token(token)
    if not claims:
        return None
    try:
        return Identity(id=int(claims["sub"]), email=claims.get("email", ""), admin=bool(claims.get("admin")))
    except (KeyError, TypeError, ValueError, ValidationError):
        return None


def get_current_user(request: Request) -> Identity:
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        raise Unauthenticated("Unauthenticated")
    identity = _identity_from_token(token)
    if identity is None:
        raise Unauthenticated("Invalid token")
    return identity


def get_optional_user(request: Request) -> Identity | None:
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        return None
    return _identity_from_token(token)


def require_admin(identity: Identity = Depends(get_current_user)) -> Identity:
    if not identity.admin:
        raise Forbidden()
    return identity


def pagination(skip: int = 0, take: int = DEFAULT_TAKE) -> tuple[int, int]:
    return max(0, skip), min(MAX_TAKE, max(1, take))
