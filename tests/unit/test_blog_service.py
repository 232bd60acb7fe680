"""
Unit tests for BlogService.
"""

import pytest

from services.blog_service import BlogService
from services.storage_service import UploadFileData
from models.blog import BlogPostCreate, BlogPostUpdate
from exceptions import BlogPostNotFoundError, BlogSlugExistsError

from tests.factories import BlogPostFactory, ImageFactory


@pytest.fixture
def posts(mock_db, mock_supabase):
    rows = [
        BlogPostFactory.create(id="p1", title="Old News", created_at="2025-01-01T00:00:00Z"),
        BlogPostFactory.create(id="p2", title="Draft", published=False, featured=True,
                               created_at="2025-04-01T00:00:00Z"),
        BlogPostFactory.create(id="p3", title="Spring Drop", featured=True,
                               created_at="2025-03-01T00:00:00Z"),
        BlogPostFactory.create(id="p4", title="Care Guide", created_at="2025-02-01T00:00:00Z"),
    ]
    mock_supabase.set_table_data("blog_posts", rows)
    return rows


class TestBlogServiceRead:

    def test_public_list_hides_drafts(self, posts):
        result = BlogService().get_all(published_only=True)
        assert [p.id for p in result] == ["p3", "p4", "p1"]

    def test_admin_list_includes_drafts(self, posts):
        assert len(BlogService().get_all()) == 4

    def test_featured_is_newest_published_featured(self, posts):
        assert BlogService().get_featured().id == "p3"

    def test_no_featured_returns_none(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("blog_posts", [BlogPostFactory.create()])
        assert BlogService().get_featured() is None

    def test_get_by_slug_hides_drafts(self, posts):
        with pytest.raises(BlogPostNotFoundError):
            BlogService().get_by_slug("draft")
        assert BlogService().get_by_slug("draft", published_only=False).id == "p2"

    def test_related_excludes_current_and_limits(self, posts):
        service = BlogService()
        current = service.get_by_slug("spring-drop")

        related = service.get_related(current, limit=1)

        assert [p.id for p in related] == ["p4"]


class TestBlogServiceWrite:

    def test_create_derives_slug_and_uploads_cover(self, mock_db, mock_supabase):
        post = BlogService().create(
            BlogPostCreate(title="How We Print", content="Body"),
            UploadFileData("cover.png", ImageFactory.create(320, 320))
        )

        assert post.slug == "how-we-print"
        assert post.cover_image.startswith("blog/")
        assert post.cover_image_url is not None
        assert post.published is False

    def test_create_duplicate_slug_rejected(self, posts):
        with pytest.raises(BlogSlugExistsError):
            BlogService().create(BlogPostCreate(title="Care Guide", content="x"))

    def test_update_same_slug_allowed(self, posts):
        post = BlogService().update("p4", BlogPostUpdate(slug="care-guide", excerpt="Wash cold"))
        assert post.excerpt == "Wash cold"

    def test_update_to_taken_slug_rejected(self, posts):
        with pytest.raises(BlogSlugExistsError):
            BlogService().update("p4", BlogPostUpdate(slug="old-news"))

    def test_update_cover_deletes_old(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("blog_posts", [
            BlogPostFactory.create(id="p1", cover_image="blog/old.jpg")
        ])

        BlogService().update(
            "p1",
            BlogPostUpdate(),
            UploadFileData("new.png", ImageFactory.create())
        )

        assert mock_supabase.storage.removed == ["blog/old.jpg"]

    def test_toggle_published(self, posts):
        service = BlogService()
        assert service.toggle_published("p2").published is True
        assert service.toggle_published("p2").published is False

    def test_delete_removes_cover_and_row(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("blog_posts", [
            BlogPostFactory.create(id="p1", cover_image="blog/a.jpg")
        ])

        BlogService().delete("p1")

        assert mock_supabase.rows("blog_posts") == []
        assert mock_supabase.storage.removed == ["blog/a.jpg"]

    def test_delete_missing_raises(self, mock_db):
        with pytest.raises(BlogPostNotFoundError):
            BlogService().delete("nope")
