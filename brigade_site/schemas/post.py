from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from brigade_site.models.status import PublishStatus

LocalizedText = dict[str, str]


class PostCreate(BaseModel):
    title: LocalizedText
    slug: Optional[LocalizedText] = None
    content: Optional[dict[str, Any]] = None
    meta_title: Optional[LocalizedText] = None
    meta_description: Optional[LocalizedText] = None
    category_id: Optional[int] = None
    status: PublishStatus = PublishStatus.DRAFT
    published_date: Optional[datetime] = None


class PostUpdate(BaseModel):
    title: Optional[LocalizedText] = None
    slug: Optional[LocalizedText] = None
    content: Optional[dict[str, Any]] = None
    meta_title: Optional[LocalizedText] = None
    meta_description: Optional[LocalizedText] = None
    category_id: Optional[int] = None
    status: Optional[PublishStatus] = None
    published_date: Optional[datetime] = None
