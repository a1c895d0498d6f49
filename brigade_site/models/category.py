from sqlalchemy import Boolean, Column, DateTime, Integer, JSON
from sqlalchemy.orm import relationship
from brigade_site.database import Base
from brigade_site.models.status import utcnow


class Category(Base):
    """A post category. ``name`` and ``slug`` are ``{locale: value}`` maps."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(JSON, nullable=False, default=dict)
    slug = Column(JSON, nullable=False, default=dict)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    posts = relationship("Post", back_populates="category")
