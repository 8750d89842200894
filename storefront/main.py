# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api import include_routers, register_error_handlers
from storefront.data.database import Database
from storefront.utils.logging import get_logger
from storefront.utils.settings import API_PREFIX, CORS_ORIGINS, DATABASE_URL, PORT, SEED_ON_START

logger = get_logger(__name__)


def create_app(database: Database | None = None, seed: bool | None = None) -> FastAPI:
    """
    Fabryka aplikacji. Uchwyt bazy jest tworzony tutaj (albo wstrzykniety w testach)
    i zyje tyle co aplikacja: open() przy starcie, close() przy zamknieciu.
    """
    database = database or Database(DATABASE_URL)
    run_seed = SEED_ON_START if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info("INITIALIZING DATABASE...")
        database.open()
        if run_seed:
            from storefront.data.seed import seed as seed_database

            # seed nie blokuje startu, api ma wstac nawet z pusta baza
            try:
                with database.session() as db:
                    seed_database(db)
            except Exception:
                logger.exception("Seed failed, continuing without demo data")
        logger.info("=" * 60)
        try:
            yield
        finally:
            database.close()

    app = FastAPI(
        title="Storefront API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    include_routers(app, prefix=API_PREFIX)

    return app


def run() -> None:
    uvicorn.run("storefront.main:create_app", factory=True, host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    run()
