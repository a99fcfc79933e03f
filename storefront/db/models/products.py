# storefront/db/models/products.py
from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, Numeric, String, DateTime, Text
from sqlalchemy.sql import func
import uuid

from storefront.db.base import Base


class Product(Base):
    __tablename__ = "products"

    """A catalog entry as authored in the admin.

    Only rows with status "published" and is_visible set are eligible for any
    public listing. Prices are nullable: "price on request" products have no
    list price and sort after priced ones.
    """

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    name_mk = Column(String, nullable=False)
    name_en = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    description_mk = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)

    price_text = Column(String, nullable=True)
    price = Column(Numeric(18, 2), nullable=True)
    sale_price = Column(Numeric(18, 2), nullable=True)
    is_on_sale = Column(Boolean, nullable=False, default=False)
    is_best_seller = Column(Boolean, nullable=False, default=False)

    status = Column(String, nullable=False, default="draft")
    is_visible = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_products_status_visible", "status", "is_visible"),
    )
