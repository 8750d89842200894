# storefront/domain/errors.py
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


# mapowanie na kody HTTP robione raz, na granicy api
HTTP_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class StoreError(Exception):
    kind = ErrorKind.INTERNAL
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]


class ValidationFailed(StoreError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid request"


class EmptyCart(ValidationFailed):
    default_message = "Empty cart"


class UnknownProduct(ValidationFailed):
    default_message = "Unknown product in cart"


class InsufficientStock(ValidationFailed):
    def __init__(self, product_name: str):
        super().__init__(f"Insufficient stock for {product_name}")


class Unauthenticated(StoreError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Unauthenticated"


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid credentials"


class Forbidden(StoreError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden"


class NotFound(StoreError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class ConstraintViolation(StoreError):
    kind = ErrorKind.CONFLICT
    default_message = "Constraint violated"


class UniqueConstraintViolation(ConstraintViolation):
    default_message = "Already exists"


class ReferenceViolation(ConstraintViolation):
    default_message = "Referenced by other records"


class PersistenceFailure(StoreError):
    kind = ErrorKind.INTERNAL
