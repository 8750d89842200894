# storefront/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String, Text

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    category = Column(String(120), nullable=False, default="")
    img = Column(String(512), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    stock = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),)
