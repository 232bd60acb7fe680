"""
Blog post service for business logic operations.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.blog import (
    BlogPostCreate,
    BlogPostUpdate,
    BlogPostResponse,
)
from exceptions import (
    BlogPostNotFoundError,
    BlogSlugExistsError,
    DatabaseError,
    StorageError,
)
from services.image_service import prepare_upload
from services.storage_service import StorageService, UploadFileData
from utils.text_utils import slugify

logger = structlog.get_logger(__name__)

IMAGE_FOLDER = "blog"


class BlogService:
    """
    Blog post business logic.

    Handles CRUD, publishing and cover images for blog posts.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.storage = StorageService()
        self.table = "blog_posts"

    def _to_response(self, row: dict) -> BlogPostResponse:
        post = BlogPostResponse(**row)
        post.cover_image_url = self.storage.get_image_url(post.cover_image)
        return post

    def _upload_cover(self, image: UploadFileData) -> str:
        cropped = prepare_upload(image.content, image.filename, IMAGE_FOLDER)
        return self.storage.upload_image(cropped.content, cropped.filename, IMAGE_FOLDER)

    def _slug_taken(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        try:
            result = self.db.table(self.table).select("id").eq("slug", slug).execute()
        except Exception as e:
            logger.error("blog_slug_check_failed", slug=slug, error=str(e))
            raise DatabaseError("select", str(e))
        return any(row["id"] != exclude_id for row in result.data or [])

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self, published_only: bool = False) -> list[BlogPostResponse]:
        """
        Get posts, newest first.

        Args:
            published_only: Hide drafts (public blog)
        """
        logger.info("getting_blog_posts", published_only=published_only)

        try:
            query = self.db.table(self.table).select("*")
            if published_only:
                query = query.eq("published", True)
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error("get_blog_posts_failed", error=str(e))
            raise DatabaseError("select", str(e))

        posts = [self._to_response(row) for row in result.data or []]
        logger.info("blog_posts_retrieved", count=len(posts))
        return posts

    def get_by_id(self, post_id: str) -> BlogPostResponse:
        """
        Raises:
            BlogPostNotFoundError: If post doesn't exist
        """
        try:
            result = self.db.table(self.table).select("*").eq("id", post_id).execute()
        except Exception as e:
            logger.error("get_blog_post_failed", post_id=post_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise BlogPostNotFoundError(post_id)

        return self._to_response(result.data[0])

    def get_by_slug(self, slug: str, published_only: bool = True) -> BlogPostResponse:
        """
        Get a post by slug.

        Raises:
            BlogPostNotFoundError: If missing, or a draft when published_only
        """
        logger.debug("getting_blog_post_by_slug", slug=slug)

        try:
            query = self.db.table(self.table).select("*").eq("slug", slug)
            if published_only:
                query = query.eq("published", True)
            result = query.execute()
        except Exception as e:
            logger.error("get_blog_post_by_slug_failed", slug=slug, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise BlogPostNotFoundError(slug)

        return self._to_response(result.data[0])

    def get_featured(self) -> Optional[BlogPostResponse]:
        """Newest post that is both featured and published."""
        for post in self.get_all(published_only=True):
            if post.featured:
                return post
        return None

    def get_related(self, post: BlogPostResponse, limit: int = 3) -> list[BlogPostResponse]:
        """Other published posts, newest first."""
        posts = self.get_all(published_only=True)
        return [p for p in posts if p.id != post.id][:limit]

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: BlogPostCreate, cover_image: Optional[UploadFileData] = None) -> BlogPostResponse:
        """
        Create a post.

        Raises:
            BlogSlugExistsError: If slug already exists
        """
        slug = data.slug or slugify(data.title)
        logger.info("creating_blog_post", slug=slug)

        if self._slug_taken(slug):
            raise BlogSlugExistsError(slug)

        cover_path = self._upload_cover(cover_image) if cover_image else None

        insert_data = data.model_dump()
        insert_data["slug"] = slug
        insert_data["cover_image"] = cover_path

        try:
            result = self.db.table(self.table).insert(insert_data).execute()
        except Exception as e:
            logger.error("create_blog_post_failed", slug=slug, error=str(e))
            raise DatabaseError("insert", str(e))

        post = self._to_response(result.data[0])
        logger.info("blog_post_created", post_id=post.id, published=post.published)
        return post

    def update(
        self,
        post_id: str,
        data: BlogPostUpdate,
        cover_image: Optional[UploadFileData] = None
    ) -> BlogPostResponse:
        """
        Update a post. A new cover replaces (and removes) the old one.

        Raises:
            BlogPostNotFoundError: If post doesn't exist
            BlogSlugExistsError: If the new slug is taken
        """
        logger.info("updating_blog_post", post_id=post_id)

        existing = self.get_by_id(post_id)

        update_data = data.model_dump(exclude_none=True)
        if "slug" in update_data and not update_data["slug"]:
            update_data["slug"] = slugify(update_data.get("title") or existing.title)

        new_slug = update_data.get("slug")
        if new_slug and new_slug != existing.slug and self._slug_taken(new_slug, exclude_id=post_id):
            raise BlogSlugExistsError(new_slug)

        if cover_image:
            if existing.cover_image:
                self.storage.delete_image(existing.cover_image)
            update_data["cover_image"] = self._upload_cover(cover_image)

        if not update_data:
            return existing

        return self._write(post_id, update_data)

    def toggle_published(self, post_id: str) -> BlogPostResponse:
        """Flip the published flag."""
        existing = self.get_by_id(post_id)
        logger.info("toggling_blog_post_published", post_id=post_id, published=not existing.published)
        return self._write(post_id, {"published": not existing.published})

    def _write(self, post_id: str, update_data: dict) -> BlogPostResponse:
        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", post_id)
                .execute()
            )
        except Exception as e:
            logger.error("update_blog_post_failed", post_id=post_id, error=str(e))
            raise DatabaseError("update", str(e))

        if not result.data:
            raise BlogPostNotFoundError(post_id)

        post = self._to_response(result.data[0])
        logger.info("blog_post_updated", post_id=post_id, fields=list(update_data.keys()))
        return post

    def delete(self, post_id: str) -> bool:
        """
        Delete a post and its cover image.

        Raises:
            BlogPostNotFoundError: If post doesn't exist
        """
        logger.info("deleting_blog_post", post_id=post_id)

        existing = self.get_by_id(post_id)

        if existing.cover_image:
            try:
                self.storage.delete_image(existing.cover_image)
            except StorageError as e:
                logger.warning("blog_cover_cleanup_failed", post_id=post_id, error=e.message)

        try:
            self.db.table(self.table).delete().eq("id", post_id).execute()
        except Exception as e:
            logger.error("delete_blog_post_failed", post_id=post_id, error=str(e))
            raise DatabaseError("delete", str(e))

        logger.info("blog_post_deleted", post_id=post_id)
        return True

    def count(self) -> int:
        """Count all posts, drafts included."""
        try:
            result = self.db.table(self.table).select("id", count="exact").execute()
            return result.count or 0
        except Exception as e:
            logger.error("count_blog_posts_failed", error=str(e))
            raise DatabaseError("count", str(e))


# Singleton instance for convenience
_blog_service: Optional[BlogService] = None

def get_blog_service() -> BlogService:
    """Get or create BlogService instance."""
    global _blog_service
    if _blog_service is None:
        _blog_service = BlogService()
    return _blog_service
