from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, DateTime
from sqlalchemy.sql import func
import uuid

from storefront.db.base import Base


class HomepageSectionItem(Base):
    __tablename__ = "homepage_section_items"

    """A tile, badge or gallery image owned by exactly one homepage section."""

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    section_id = Column(String(36), ForeignKey("homepage_sections.id", ondelete="CASCADE"), nullable=False)

    title_mk = Column(String, nullable=True)
    title_en = Column(String, nullable=True)
    subtitle_mk = Column(String, nullable=True)
    subtitle_en = Column(String, nullable=True)

    image_path = Column(String, nullable=True)
    link = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    background_color = Column(String, nullable=True)
    text_color = Column(String, nullable=True)

    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_homepage_section_items_section_order", "section_id", "display_order"),
    )
