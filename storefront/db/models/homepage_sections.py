# storefront/db/models/homepage_sections.py
from sqlalchemy import JSON, Boolean, Column, Index, Integer, String, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
import uuid

from storefront.db.base import Base


class HomepageSection(Base):
    __tablename__ = "homepage_sections"

    """One admin-configured block of the homepage.

    section_type is kept as free text: the storefront must cope with tags it
    does not know. The shape of config depends on section_type and is only
    trusted after it has been parsed by the section config registry.
    """

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    section_type = Column(String, nullable=False)

    title_mk = Column(String, nullable=True)
    title_en = Column(String, nullable=True)
    subtitle_mk = Column(String, nullable=True)
    subtitle_en = Column(String, nullable=True)

    layout_style = Column(String, nullable=False, default="grid-4")
    item_shape = Column(String, nullable=False, default="square")
    config = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=dict)

    background_color = Column(String, nullable=False, default="#FFFFFF")
    background_style = Column(String, nullable=False, default="solid")
    padding_size = Column(String, nullable=False, default="medium")

    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_homepage_sections_active_order", "is_active", "display_order"),
    )
