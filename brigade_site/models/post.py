from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, JSON, func
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import relationship
from brigade_site.database import Base
from brigade_site.models.status import PublishStatus, utcnow


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Localized fields ({locale: value})
    title = Column(JSON, nullable=False, default=dict)
    slug = Column(JSON, nullable=False, default=dict)
    content = Column(JSON, nullable=True)
    meta_title = Column(JSON, nullable=True)
    meta_description = Column(JSON, nullable=True)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    status = Column(
        Enum(PublishStatus, values_callable=lambda e: [m.value for m in e]),
        default=PublishStatus.DRAFT,
        nullable=False,
    )
    published_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    category = relationship("Category", back_populates="posts", lazy="selectin")

    __table_args__ = (
        Index("idx_posts_category_status", "category_id", "status"),
    )

    @hybrid_property
    def sort_date(self):
        """Chronological ordering key: publish date, else creation date."""
        return self.published_date if self.published_date is not None else self.created_at

    @sort_date.expression
    def sort_date(cls):
        return func.coalesce(cls.published_date, cls.created_at)
