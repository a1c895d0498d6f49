from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship
from brigade_site.database import Base
from brigade_site.models.status import PublishStatus, utcnow


class Page(Base):
    """A content page that doubles as a navigation menu node.

    Top items (``is_top_item``) are first-level menu entries; every other page
    hangs below exactly one top item through ``menu_parent_id``.
    """

    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    is_top_item = Column(Boolean, nullable=False, default=False)

    # Localized fields ({locale: value})
    menu_label = Column(JSON, nullable=True)
    title = Column(JSON, nullable=True)
    slug = Column(JSON, nullable=True)
    description = Column(JSON, nullable=True)
    content = Column(JSON, nullable=True)

    menu_parent_id = Column(Integer, ForeignKey("pages.id"), nullable=True, index=True)
    status = Column(
        Enum(PublishStatus, values_callable=lambda e: [m.value for m in e]),
        default=PublishStatus.DRAFT,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    menu_parent = relationship("Page", remote_side=[id], lazy="selectin")
