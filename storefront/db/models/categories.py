# storefront/db/models/categories.py
from sqlalchemy import Boolean, Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func
import uuid

from storefront.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    """A product category shown in navigation, the shop sidebar and category pages.

    Names and descriptions are bilingual (`_mk` / `_en`); the untagged `name`
    and `description` columns are legacy values kept as a last fallback.
    """

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    name_mk = Column(String, nullable=False)
    name_en = Column(String, nullable=True)
    slug = Column(String, nullable=False, unique=True, index=True)

    description = Column(Text, nullable=True)
    description_mk = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    category_image_path = Column(String, nullable=True)

    display_order = Column(Integer, nullable=False, default=0)
    is_visible = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
