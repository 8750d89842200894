# storefront/data/models/sale.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class SaleModel(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    total = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("UserModel")
    items = relationship("SaleItemModel", back_populates="sale", cascade="all, delete-orphan", order_by="SaleItemModel.id")

    __table_args__ = (Index("ix_sales_user_created", "user_id", "created_at"),)


class SaleItemModel(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True)
    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    qty = Column(Integer, nullable=False)
    # cena z momentu zakupu, nie sledzi pozniejszych zmian w katalogu
    price = Column(Numeric(10, 2), nullable=False)

    sale = relationship("SaleModel", back_populates="items")
    product = relationship("ProductModel")
