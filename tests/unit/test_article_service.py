"""
Unit tests for ArticleService.
"""
from unittest.mock import patch

import pytest

from pulse_api.config import Config, DEFAULT_CATEGORY_IMAGES
from pulse_api.exceptions import ArticleNotFoundError, MirrorError
from tests.unit.test_store_base import BaseLocalDiskTests


def article_body(**overrides):
    """Build a create/update request body."""
    body = {
        "title": "Quantum Chips",
        "category": "technology",
        "excerpt": "Short summary",
        "content": "Long content",
    }
    body.update(overrides)
    return body


class TestArticleService(BaseLocalDiskTests):
    """Test suite for ArticleService."""

    @pytest.fixture
    def config(self):
        """Explicit configuration with the built-in category table."""
        return Config({"CATEGORY_IMAGES": "", "DEFAULT_CATEGORY": "technology"})

    @pytest.fixture
    def store(self, temp_state_dir, mock_mirror):
        """Create a local disk store wired to the mock mirror."""
        from pulse_api.local_disk_article_store import LocalDiskArticleStore
        return LocalDiskArticleStore(state_dir=temp_state_dir, mirror=mock_mirror)

    @pytest.fixture
    def service(self, store, mock_mirror, config):
        """Create the service under test."""
        from pulse_api.article_service import ArticleService
        return ArticleService(store=store, mirror=mock_mirror, config=config)

    # ---------- create ----------

    def test_create_ai_category_uses_ai_default_image(self, service):
        """Test that an AI article without a custom image gets the AI default."""
        article = service.create_article(article_body(category="ai"))
        assert article["image"] == DEFAULT_CATEGORY_IMAGES["ai"]

    def test_create_unknown_category_uses_technology_image(self, service):
        """Test that an unrecognised category falls back to the technology image."""
        article = service.create_article(article_body(category="gardening"))
        assert article["image"] == DEFAULT_CATEGORY_IMAGES["technology"]

    def test_unknown_default_category_falls_back_to_technology(self, store, mock_mirror):
        """Test that a default category missing from the table still yields an image."""
        from pulse_api.article_service import ArticleService
        config = Config({"CATEGORY_IMAGES": "", "DEFAULT_CATEGORY": "news"})
        service = ArticleService(store=store, mirror=mock_mirror, config=config)
        article = service.create_article(article_body(category="zzz"))
        assert article["image"] == DEFAULT_CATEGORY_IMAGES["technology"]

    def test_empty_technology_override_falls_back_to_builtin(self, store, mock_mirror):
        """Test that an empty configured technology image never produces an empty image."""
        from pulse_api.article_service import ArticleService
        config = Config({"CATEGORY_IMAGES": '{"technology": "", "ai": null}',
                         "DEFAULT_CATEGORY": "technology"})
        service = ArticleService(store=store, mirror=mock_mirror, config=config)
        assert service.create_article(article_body(category="zzz"))["image"] == (
            DEFAULT_CATEGORY_IMAGES["technology"]
        )
        assert service.create_article(article_body(category="ai"))["image"] == (
            DEFAULT_CATEGORY_IMAGES["ai"]
        )

    def test_non_string_category_uses_default_image(self, service):
        """Test that a non-string category does not break image resolution."""
        article = service.create_article(article_body(category=["ai"]))
        assert article["image"] == DEFAULT_CATEGORY_IMAGES["technology"]

    def test_create_custom_image_url_wins(self, service, mock_mirror):
        """Test that a custom URL beats both image data and the category default."""
        article = service.create_article(article_body(
            customImageUrl="https://cdn.example.com/cover.jpg",
            imageData="data:image/png;base64,iVBORw0KGgo="
        ))
        assert article["image"] == "https://cdn.example.com/cover.jpg"
        mock_mirror.push_image.assert_not_called()

    def test_create_blank_custom_url_is_ignored(self, service):
        """Test that a whitespace-only custom URL does not count."""
        article = service.create_article(article_body(category="energy", customImageUrl="   "))
        assert article["image"] == DEFAULT_CATEGORY_IMAGES["energy"]

    @patch("pulse_api.article_service.get_epoch_millis", return_value=1700000000000)
    def test_create_uploads_png_image_data(self, _mock_millis, service, mock_mirror):
        """Test that image data is uploaded with a .png name for PNG payloads."""
        article = service.create_article(article_body(imageData="data:image/png;base64,iVBORw0KGgo="))
        mock_mirror.push_image.assert_called_once_with(
            "data:image/png;base64,iVBORw0KGgo=", "article-1700000000000.png"
        )
        assert article["image"] == "https://mirror.example.com/images/article-1700000000000.png"

    def test_create_uploads_non_png_as_jpg(self, service, mock_mirror):
        """Test that non-PNG image data gets a .jpg name."""
        service.create_article(article_body(imageData="data:image/jpeg;base64,/9j/4AAQ"))
        filename = mock_mirror.push_image.call_args[0][1]
        assert filename.endswith(".jpg")

    def test_create_assigns_fields(self, service):
        """Test that create fills in id, timestamp and views."""
        article = service.create_article(article_body())
        assert article["id"]
        assert article["title"] == "Quantum Chips"
        assert article["views"] == 0
        assert article["date"].endswith("Z")

    def test_create_ids_are_unique(self, service):
        """Test that back-to-back creates get distinct ids."""
        ids = {service.create_article(article_body())["id"] for _ in range(20)}
        assert len(ids) == 20

    def test_create_prepends_newest_first(self, service):
        """Test that the newest article is first in the list."""
        first = service.create_article(article_body(title="First"))
        second = service.create_article(article_body(title="Second"))
        assert [a["id"] for a in service.list_articles()] == [second["id"], first["id"]]

    def test_create_commit_message(self, service, mock_mirror):
        """Test that the mirror commit describes the new article."""
        service.create_article(article_body(title="Fusion Now"))
        assert mock_mirror.push_document.call_args[0][1] == "Added new article: Fusion Now"

    def test_create_then_get_round_trip(self, service):
        """Test that get returns exactly what create returned."""
        created = service.create_article(article_body())
        fetched = service.get_article(created["id"])
        assert fetched == created
        assert fetched["views"] == 0

    # ---------- get ----------

    def test_get_unknown_id_raises(self, service):
        """Test that an unknown id raises ArticleNotFoundError."""
        with pytest.raises(ArticleNotFoundError):
            service.get_article("does-not-exist")

    # ---------- update ----------

    def test_update_keeps_id_and_image_without_new_image(self, service, mock_mirror):
        """Test update replaces text fields, keeps id/image and refreshes the date."""
        with patch("pulse_api.article_service.get_utc_timestamp",
                   return_value="2024-01-01T00:00:00.000000Z"):
            created = service.create_article(article_body(category="ai"))

        with patch("pulse_api.article_service.get_utc_timestamp",
                   return_value="2024-01-02T00:00:00.000000Z"):
            updated = service.update_article(created["id"], article_body(
                title="New title", category="security", excerpt="New excerpt", content="New content"
            ))

        assert updated["id"] == created["id"]
        assert updated["image"] == created["image"]
        assert updated["title"] == "New title"
        assert updated["category"] == "security"
        assert updated["excerpt"] == "New excerpt"
        assert updated["content"] == "New content"
        assert updated["date"] > created["date"]
        assert updated["views"] == 0
        mock_mirror.push_image.assert_not_called()
        assert service.get_article(created["id"]) == updated

    def test_update_with_custom_url_replaces_image(self, service):
        """Test that a custom URL on update replaces the image."""
        created = service.create_article(article_body())
        updated = service.update_article(
            created["id"], article_body(customImageUrl="https://cdn.example.com/new.png")
        )
        assert updated["image"] == "https://cdn.example.com/new.png"

    def test_update_with_image_data_uses_updated_filename(self, service, mock_mirror):
        """Test that image data on update is uploaded as article-<id>-updated.<ext>."""
        created = service.create_article(article_body())
        updated = service.update_article(
            created["id"], article_body(imageData="data:image/png;base64,iVBORw0KGgo=")
        )
        filename = f"article-{created['id']}-updated.png"
        mock_mirror.push_image.assert_called_once_with("data:image/png;base64,iVBORw0KGgo=", filename)
        assert updated["image"].endswith(filename)

    def test_update_omitted_fields_become_none(self, service):
        """Test that fields missing from the body are cleared."""
        created = service.create_article(article_body())
        updated = service.update_article(created["id"], {"title": "Only title"})
        assert updated["title"] == "Only title"
        assert updated["excerpt"] is None
        assert updated["content"] is None
        assert updated["category"] is None
        assert updated["image"] == created["image"]

    def test_update_unknown_id_raises(self, service):
        """Test that updating an unknown id raises ArticleNotFoundError."""
        with pytest.raises(ArticleNotFoundError):
            service.update_article("missing", article_body())

    def test_update_commit_message(self, service, mock_mirror):
        """Test that the mirror commit describes the update."""
        created = service.create_article(article_body())
        service.update_article(created["id"], article_body(title="Renamed"))
        assert mock_mirror.push_document.call_args[0][1] == "Updated article: Renamed"

    # ---------- delete ----------

    def test_delete_removes_article(self, service):
        """Test that a deleted article is gone from list and get."""
        keep = service.create_article(article_body(title="Keep"))
        gone = service.create_article(article_body(title="Gone"))

        service.delete_article(gone["id"])

        assert [a["id"] for a in service.list_articles()] == [keep["id"]]
        with pytest.raises(ArticleNotFoundError):
            service.get_article(gone["id"])

    def test_delete_commit_message(self, service, mock_mirror):
        """Test that the mirror commit names the deleted article."""
        created = service.create_article(article_body(title="Old news"))
        service.delete_article(created["id"])
        assert mock_mirror.push_document.call_args[0][1] == "Deleted article: Old news"

    def test_delete_unknown_id_raises(self, service):
        """Test that deleting an unknown id raises ArticleNotFoundError."""
        with pytest.raises(ArticleNotFoundError):
            service.delete_article("missing")

    # ---------- upload / health ----------

    def test_upload_image_uses_given_filename(self, service, mock_mirror):
        """Test that the supplied filename is used as-is."""
        url = service.upload_image("data:image/png;base64,iVBORw0KGgo=", "logo.png")
        assert url == "https://mirror.example.com/images/logo.png"
        assert service.list_articles() == []

    @patch("pulse_api.article_service.get_epoch_millis", return_value=123)
    def test_upload_image_default_filename(self, _mock_millis, service, mock_mirror):
        """Test the image-<millis>.jpg fallback filename."""
        service.upload_image("/9j/4AAQ")
        mock_mirror.push_image.assert_called_once_with("/9j/4AAQ", "image-123.jpg")

    def test_upload_image_requires_data(self, service):
        """Test that missing image data is rejected."""
        with pytest.raises(ValueError):
            service.upload_image(None)

    def test_mirror_failure_during_create_propagates(self, service, mock_mirror):
        """Test that a mirror failure surfaces to the caller after the local write."""
        mock_mirror.push_document.side_effect = MirrorError("boom")
        with pytest.raises(MirrorError):
            service.create_article(article_body(title="Local only"))
        assert service.list_articles()[0]["title"] == "Local only"

    def test_health(self, service):
        """Test the health payload."""
        health = service.health()
        assert health["status"] == "ok"
        assert health["timestamp"]
