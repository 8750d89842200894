# storefront/repos/user_repo.py
from typing import List, Tuple

from sqlalchemy import func, or_, select, true

from storefront.data.models.user import UserModel
from storefront.repos.base import BaseRepo, contains_ci


class UserRepo(BaseRepo):
    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(select(UserModel).where(UserModel.email == email)).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.commit("Email already in use")
        self.db.refresh(user)
        return user

    def page_users(self, search: str, skip: int, take: int) -> Tuple[List[UserModel], int]:
        where = or_(contains_ci(UserModel.email, search), contains_ci(UserModel.name, search)) if search else true()
        items = self.db.execute(
            select(UserModel)
            .where(where)
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .offset(skip)
            .limit(take)
        ).scalars().all()
        total = self.db.execute(select(func.count()).select_from(UserModel).where(where)).scalar_one()
        return list(items), total
