import enum
from datetime import datetime, timezone


class PublishStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
