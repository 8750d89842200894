# storefront/utils/security.py
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from storefront.utils.settings import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_SECRET, TOKEN_TTL_SECONDS

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: int, email: str, admin: bool, ttl_seconds: int | None = None) -> str:
    """
    Podpisany token z claimami tozsamosci.
    Brak listy odwolan po stronie serwera, token zyje do `exp`.
    """
    expire = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds or TOKEN_TTL_SECONDS)
    claims = {
        "sub": str(user_id),
        "email": email,
        "admin": bool(admin),
        "exp": expire,
    }
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None
