from sqlalchemy.ext.asyncio import AsyncSession
from brigade_site.exceptions import PostNotFoundError
from brigade_site.models.post import Post
from brigade_site.models.status import PublishStatus, utcnow
from brigade_site.schemas.post import PostCreate, PostUpdate
from brigade_site.utils.slugify import slugify_localized
from typing import Any, Optional
import logging

logger = logging.getLogger(__name__)


def prepare_post(data: dict[str, Any], previous_status: Optional[PublishStatus] = None) -> dict[str, Any]:
    """
    Fill in derived fields before a post is written.

    - a slug is generated from the title for every locale that lacks one
    - ``published_date`` is stamped when the post is published without a
      date, or moves from draft to published
    """
    if isinstance(data.get("title"), dict):
        data["slug"] = slugify_localized(data["title"], data.get("slug"))

    if data.get("status") == PublishStatus.PUBLISHED:
        if data.get("published_date") is None or (
            previous_status is not None and previous_status != PublishStatus.PUBLISHED
        ):
            data["published_date"] = utcnow()
    return data


async def save_post(
    db: AsyncSession,
    data: PostCreate | PostUpdate,
    post_id: Optional[int] = None,
) -> Post:
    """
    Creates or updates a post.

    Args:
        db (AsyncSession): The database session.
        data (PostCreate | PostUpdate): Post fields; updates are partial.
        post_id (int, optional): The post to update, None to create one.

    Returns:
        Post: The saved post.

    Raises:
        PostNotFoundError: If ``post_id`` does not exist.
    """
    previous_status = None
    if post_id is None:
        post = Post()
        state = data.model_dump()
    else:
        post = await db.get(Post, post_id)
        if not post:
            raise PostNotFoundError(post_id)
        previous_status = post.status
        state = {
            "title": post.title,
            "slug": post.slug,
            "status": post.status,
            "published_date": post.published_date,
        }
        state.update(data.model_dump(exclude_unset=True))

    state = prepare_post(state, previous_status)
    for field, value in state.items():
        if value is None and field in ("title", "slug", "status"):
            continue
        setattr(post, field, value)

    db.add(post)
    try:
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"Error saving post: {str(e)}")
        raise RuntimeError(f"Failed to save post: {str(e)}") from e

    await db.refresh(post)
    logger.info(f"Post saved successfully: {post.id}")
    return post
