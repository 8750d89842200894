# storefront/services/review_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel
from storefront.domain.errors import NotFound, ValidationFailed
from storefront.domain.schemas import ReviewIn, ReviewUpdateIn
from storefront.repos.product_repo import ProductRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def check_stars(stars: int) -> int:
    if stars < 1 or stars > 5:
        raise ValidationFailed("stars must be between 1 and 5")
    return stars


class ReviewService:
    """Opinie: publicznie tylko opublikowane, nowe czekaja na akceptacje admina."""

    def __init__(self, db: Session):
        self.repo = ReviewRepo(db)
        self.products = ProductRepo(db)

    def list_reviews(self, include_unpublished: bool = False, product_id: int | None = None) -> List[ReviewModel]:
        return self.repo.list_reviews(include_unpublished, product_id)

    def submit(self, payload: ReviewIn, user_id: int | None = None) -> ReviewModel:
        check_stars(payload.stars)
        if payload.product_id is not None:
            self.products.require_product(payload.product_id)

        review = self.repo.add_review(
            ReviewModel(
                name=payload.name,
                text=payload.text,
                stars=payload.stars,
                published=False,
                user_id=user_id,
                product_id=payload.product_id,
            )
        )
        self.repo.commit("You already reviewed this product")
        logger.info(f"Nowa opinia {review.id} czeka na moderacje")
        return review

    def update(self, review_id: int, payload: ReviewUpdateIn) -> ReviewModel:
        review = self.repo.get_review(review_id)
        if not review:
            raise NotFound("Review not found")

        data = payload.model_dump(exclude_unset=True)
        if data.get("stars") is not None:
            check_stars(data["stars"])

        for field in ("name", "text", "stars", "published"):
            if field in data and (data[field] is not None or field == "name"):
                setattr(review, field, data[field])

        self.repo.commit()
        logger.info(f"Opinia {review.id} zmoderowana (published={review.published})")
        return review

    def delete(self, review_id: int) -> None:
        review = self.repo.get_review(review_id)
        if not review:
            raise NotFound("Review not found")
        self.repo.delete_review(review)
        self.repo.commit()
        logger.info(f"Usunieto opinie {review_id}")
