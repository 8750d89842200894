# storefront/services/faq_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.faq import FaqModel
from storefront.domain.errors import NotFound
from storefront.domain.schemas import FaqIn, FaqUpdateIn
from storefront.repos.faq_repo import FaqRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class FaqService:
    def __init__(self, db: Session):
        self.repo = FaqRepo(db)

    def list_faqs(self, include_unpublished: bool = False) -> List[FaqModel]:
        return self.repo.list_faqs(include_unpublished)

    def create(self, payload: FaqIn) -> FaqModel:
        faq = self.repo.add_faq(FaqModel(**payload.model_dump()))
        self.repo.commit()
        logger.info(f"Utworzono FAQ {faq.id}")
        return faq

    def update(self, faq_id: int, payload: FaqUpdateIn) -> FaqModel:
        faq = self._require(faq_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(faq, field, value)
        self.repo.commit()
        logger.info(f"Zaktualizowano FAQ {faq.id}")
        return faq

    def delete(self, faq_id: int) -> None:
        faq = self._require(faq_id)
        self.repo.delete_faq(faq)
        self.repo.commit()
        logger.info(f"Usunieto FAQ {faq_id}")

    def _require(self, faq_id: int) -> FaqModel:
        faq = self.repo.get_faq(faq_id)
        if not faq:
            raise NotFound("FAQ not found")
        return faq
