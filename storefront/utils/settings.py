# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://postgres:postgres@db:5432/storefront")
DB_CONNECT_ATTEMPTS = int(os.getenv("DB_CONNECT_ATTEMPTS", 10))

JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
TOKEN_TTL_SECONDS = int(os.getenv("TOKEN_TTL_SECONDS", 7 * 24 * 60 * 60))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

COOKIE_NAME = os.getenv("COOKIE_NAME", "auth")
# http: secure=False + SameSite=Lax, https: secure=True + SameSite=None
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "").lower() == "true"

API_PREFIX = os.getenv("API_PREFIX", "/api")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

SEED_ON_START = os.getenv("SEED_ON_START", "").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", 5000))

# pagination for admin listings
DEFAULT_TAKE = 20
MAX_TAKE = 100
