# storefront/services/user_service.py
from typing import List, Tuple

from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import InvalidCredentials, NotFound, UniqueConstraintViolation, ValidationFailed
from storefront.domain.schemas import AdminUserUpdateIn, LoginIn, ProfileUpdateIn, RegisterIn
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger
from storefront.utils.security import hash_password, verify_password

logger = get_logger(__name__)

EMAIL_TAKEN = "Email already in use"
MIN_PASSWORD_LENGTH = 6


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: RegisterIn) -> UserModel:
        email = payload.email.strip()
        if self.repo.get_by_email(email):
            raise UniqueConstraintViolation(EMAIL_TAKEN)

        user = UserModel(
            name=payload.name,
            email=email,
            password=hash_password(payload.password),
            admin=False,
        )
        created = self.repo.create_user(user)
        logger.info(f"Zarejestrowano uzytkownika {created.id}")
        return created

    def login(self, payload: LoginIn) -> UserModel:
        # ten sam blad dla nieznanego emaila i zlego hasla
        user = self.repo.get_by_email(payload.email.strip())
        if not user or not verify_password(payload.password, user.password):
            logger.warning("Nieudane logowanie")
            raise InvalidCredentials()
        return user

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def update_profile(self, user_id: int, payload: ProfileUpdateIn) -> Tuple[UserModel, bool]:
        """
        Zmiana profilu wymaga aktualnego hasla, nawet dla samego `name`.
        Zwraca (user, email_changed), przy zmianie emaila trzeba wystawic nowy token.
        """
        if not payload.current_password:
            raise ValidationFailed("Current password required")

        me = self.get_user(user_id)
        if not verify_password(payload.current_password, me.password):
            raise InvalidCredentials("Current password is invalid")

        changed = False
        email_changed = False

        if payload.name is not None:
            me.name = payload.name.strip()
            changed = True

        if payload.email is not None and payload.email.strip() and payload.email.strip() != me.email:
            new_email = payload.email.strip()
            existing = self.repo.get_by_email(new_email)
            if existing and existing.id != me.id:
                raise UniqueConstraintViolation(EMAIL_TAKEN)
            me.email = new_email
            changed = True
            email_changed = True

        if payload.new_password:
            me.password = hash_password(payload.new_password)
            changed = True

        if changed:
            self.repo.commit(EMAIL_TAKEN)
            logger.info(f"Uzytkownik {me.id} zaktualizowal profil")

        return me, email_changed

    # admin

    def page_users(self, search: str, skip: int, take: int) -> Tuple[List[UserModel], int]:
        return self.repo.page_users(search, skip, take)

    def admin_update(self, user_id: int, payload: AdminUserUpdateIn) -> UserModel:
        user = self.get_user(user_id)
        data = payload.model_dump(exclude_unset=True)

        if data.get("name") is not None:
            user.name = data["name"]
        if data.get("email") is not None:
            user.email = data["email"].strip()
        if data.get("admin") is not None:
            user.admin = bool(data["admin"])

        self.repo.commit(EMAIL_TAKEN)
        logger.info(f"Admin zaktualizowal uzytkownika {user.id}")
        return user

    def reset_password(self, user_id: int, new_password: str | None) -> None:
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed("New password is invalid")

        user = self.get_user(user_id)
        user.password = hash_password(new_password)
        self.repo.commit()
        logger.info(f"Admin zresetowal haslo uzytkownika {user.id}")
