# storefront/repos/base.py
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.domain.errors import ConstraintViolation, ReferenceViolation, UniqueConstraintViolation

# kody SQLSTATE z psycopg2
PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"


def contains_ci(column, term: str):
    """LIKE %term% bez rozrozniania wielkosci liter, z escapowaniem % i _."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def equals_ci(column, term: str):
    return func.lower(column) == term.lower()


def constraint_error(e: IntegrityError, message: str | None = None) -> ConstraintViolation:
    """Rodzaj naruszenia z kodu postgresa albo z komunikatu sqlite."""
    code = getattr(e.orig, "pgcode", None)
    detail = str(e.orig).upper()
    if code == PG_UNIQUE_VIOLATION or "UNIQUE CONSTRAINT" in detail:
        return UniqueConstraintViolation(message)
    if code == PG_FOREIGN_KEY_VIOLATION or "FOREIGN KEY CONSTRAINT" in detail:
        return ReferenceViolation(message)
    return ConstraintViolation(message)


class BaseRepo:
    def __init__(self, db: Session):
        self.db = db

    def flush(self, conflict_message: str | None = None) -> None:
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise constraint_error(e, conflict_message) from e

    def commit(self, conflict_message: str | None = None) -> None:
        # bledy silnika tlumaczone tutaj, wyzej leci juz tylko ErrorKind
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise constraint_error(e, conflict_message) from e
