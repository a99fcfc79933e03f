# storefront/db/models/products_with_details.py
from sqlalchemy import Boolean, Column, Integer, Numeric, String, DateTime, Text

from storefront.db.base import Base


class ProductWithDetails(Base):
    __tablename__ = "products_with_details"

    """Read model joining a product with its category and primary image.

    In PostgreSQL this is a view over products, categories and product
    images; it is mapped here so queries can target it like a table. It is
    never written to by this service.
    """

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False)
    name_mk = Column(String, nullable=False)
    name_en = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    description_mk = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)

    price_text = Column(String, nullable=True)
    price = Column(Numeric(18, 2), nullable=True)
    sale_price = Column(Numeric(18, 2), nullable=True)
    status = Column(String, nullable=False)
    is_on_sale = Column(Boolean, nullable=False)
    is_best_seller = Column(Boolean, nullable=False)
    display_order = Column(Integer, nullable=False)
    is_visible = Column(Boolean, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    category_id = Column(String(36), nullable=False)
    category_name = Column(String, nullable=True)
    category_name_mk = Column(String, nullable=True)
    category_name_en = Column(String, nullable=True)
    category_slug = Column(String, nullable=True)
    primary_image_path = Column(String, nullable=True)
