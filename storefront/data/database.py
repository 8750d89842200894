# storefront/data/database.py

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from storefront.utils.retry import db_connect_retry
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # sqlite domyslnie ignoruje klucze obce
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Jawny uchwyt dostepu do bazy: engine + fabryka sesji.
    Tworzony raz przy starcie procesu i przekazywany dalej,
    open() przy starcie, close() przy zamknieciu.
    """

    def __init__(self, url: str | None = None, engine: Engine | None = None, **engine_kwargs):
        if engine is None:
            if url is None:
                raise ValueError("Database needs either a url or an engine")
            engine = create_engine(url, pool_pre_ping=True, **engine_kwargs)
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        self.engine = engine
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def open(self, create_schema: bool = True) -> None:
        # import wszystkich modeli zeby byly zarejestrowane w Base.metadata
        import storefront.data.models  # noqa: F401

        db_connect_retry()(self._ping)()
        if create_schema:
            Base.metadata.create_all(bind=self.engine)
            logger.info(f"Schema ready: {sorted(Base.metadata.tables.keys())}")

    def _ping(self) -> None:
        logger.info(f"Checking database connection ({self.engine.url.render_as_string(hide_password=True)})")
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")

    def session(self) -> Session:
        return self.SessionLocal()
