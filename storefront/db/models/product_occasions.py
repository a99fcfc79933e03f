from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.sql import func

from storefront.db.base import Base


class ProductOccasion(Base):
    __tablename__ = "product_occasions"

    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    occasion_id = Column(String(36), ForeignKey("occasions.id", ondelete="CASCADE"), primary_key=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
