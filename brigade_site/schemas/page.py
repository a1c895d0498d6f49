from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from brigade_site.models.status import PublishStatus

LocalizedText = dict[str, str]


class PageCreate(BaseModel):
    is_top_item: bool = False
    menu_label: Optional[LocalizedText] = None
    title: Optional[LocalizedText] = None
    slug: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    content: Optional[dict[str, Any]] = None
    menu_parent: Optional[int] = None
    status: PublishStatus = PublishStatus.DRAFT


class PageUpdate(BaseModel):
    is_top_item: Optional[bool] = None
    menu_label: Optional[LocalizedText] = None
    title: Optional[LocalizedText] = None
    slug: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    content: Optional[dict[str, Any]] = None
    menu_parent: Optional[int] = None
    status: Optional[PublishStatus] = None


class PageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    is_top_item: bool
    menu_label: Optional[LocalizedText]
    title: Optional[LocalizedText]
    slug: Optional[LocalizedText]
    description: Optional[LocalizedText]
    menu_parent_id: Optional[int]
    status: PublishStatus
