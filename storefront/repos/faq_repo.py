# storefront/repos/faq_repo.py
from typing import List

from sqlalchemy import select

from storefront.data.models.faq import FaqModel
from storefront.repos.base import BaseRepo


class FaqRepo(BaseRepo):
    def list_faqs(self, include_unpublished: bool = False) -> List[FaqModel]:
        stmt = select(FaqModel)
        if not include_unpublished:
            stmt = stmt.where(FaqModel.published.is_(True))
        stmt = stmt.order_by(FaqModel.ordering.asc(), FaqModel.created_at.asc(), FaqModel.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_faq(self, faq_id: int) -> FaqModel | None:
        return self.db.get(FaqModel, faq_id)

    def add_faq(self, faq: FaqModel) -> FaqModel:
        self.db.add(faq)
        return faq

    def delete_faq(self, faq: FaqModel) -> None:
        self.db.delete(faq)
