from .category import Category
from .page import Page
from .post import Post
from .status import PublishStatus

__all__ = [
    "Category",
    "Page",
    "Post",
    "PublishStatus",
]
