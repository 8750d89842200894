# storefront/data/models/faq.py
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, Text

from storefront.data.database import Base


class FaqModel(Base):
    __tablename__ = "faqs"

    id = Column(Integer, primary_key=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    ordering = Column(Integer, nullable=False, default=0)
    published = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (Index("ix_faqs_published_ordering", "published", "ordering"),)
