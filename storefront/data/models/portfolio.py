# storefront/data/models/portfolio.py
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from storefront.data.database import Base


class PortfolioModel(Base):
    __tablename__ = "portfolio"

    id = Column(Integer, primary_key=True)
    slug = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    image_url = Column(String(1024), nullable=False)
    description = Column(Text, nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
