# storefront/repos/review_repo.py
from typing import List

from sqlalchemy import select

from storefront.data.models.review import ReviewModel
from storefront.repos.base import BaseRepo


class ReviewRepo(BaseRepo):
    def list_reviews(self, include_unpublished: bool = False, product_id: int | None = None) -> List[ReviewModel]:
        stmt = select(ReviewModel)
        if not include_unpublished:
            stmt = stmt.where(ReviewModel.published.is_(True))
        if product_id is not None:
            stmt = stmt.where(ReviewModel.product_id == product_id)
        stmt = stmt.order_by(ReviewModel.stars.desc(), ReviewModel.created_at.desc(), ReviewModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_review(self, review_id: int) -> ReviewModel | None:
        return self.db.get(ReviewModel, review_id)

    def add_review(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        return review

    def delete_review(self, review: ReviewModel) -> None:
        self.db.delete(review)
