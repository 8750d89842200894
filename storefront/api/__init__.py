# storefront/api/__init__.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.api.routers import (
    admin_products,
    admin_sales,
    admin_users,
    cart,
    checkout,
    faqs,
    health,
    portfolio,
    products,
    reviews,
    users,
)
from storefront.domain.errors import ErrorKind, StoreError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ROUTERS = [
    health.router,
    users.router,
    products.router,
    cart.router,
    checkout.router,
    faqs.router,
    reviews.router,
    portfolio.router,
    admin_products.router,
    admin_users.router,
    admin_sales.router,
]


def include_routers(app: FastAPI, prefix: str = "") -> None:
    for router in ROUTERS:
        app.include_router(router, prefix=prefix)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    return f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        if exc.kind is ErrorKind.INTERNAL:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} crashed: {exc}")
        return JSONResponse(status_code=500, content={"error": "Server error"})
