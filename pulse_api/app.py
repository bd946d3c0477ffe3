"""
HTTP API for the Innovation Pulse blog.
Exposes article CRUD, image upload and a health check as JSON endpoints.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from pulse_api.article_service import ArticleService
from pulse_api.article_store import ArticleStore
from pulse_api.config import Config
from pulse_api.exceptions import ArticleNotFoundError
from pulse_api.local_disk_article_store import LocalDiskArticleStore
from pulse_api.local_only_mirror import LocalOnlyMirror
from pulse_api.mirror_factory import create_remote_mirror
from pulse_api.remote_mirror import RemoteMirror

# Configure API logger
logger = logging.getLogger('pulse_api')
logger.setLevel(logging.INFO)

# Add console handler if not already present
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)


def sanitize_log_input(value: str) -> str:
    """
    Sanitize user input for logging to prevent log injection attacks.
    Removes newlines and other control characters that could be used for log forging.

    Args:
        value: The user input to sanitize

    Returns:
        Sanitized string safe for logging
    """
    if not isinstance(value, str):
        value = str(value)
    sanitized = value.replace('\n', '_').replace('\r', '_').replace('\t', '_')
    # Truncate to reasonable length to prevent log flooding
    return sanitized[:200]


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the {error} body every failing endpoint returns."""
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    config: Optional[Config] = None,
    store: Optional[ArticleStore] = None,
    mirror: Optional[RemoteMirror] = None
) -> FastAPI:
    """
    Create the article API FastAPI application.

    Args:
        config: Configuration (defaults to one loaded from the environment)
        store: Optional article store (defaults to LocalDiskArticleStore in config.state_dir)
        mirror: Optional remote mirror (defaults to factory-created from config)

    Returns:
        FastAPI application instance
    """
    if config is None:
        config = Config()
    logger.setLevel(config.log_level)

    if mirror is None:
        mirror = create_remote_mirror(config)
    if store is None:
        store = LocalDiskArticleStore(state_dir=config.state_dir, mirror=mirror)

    service = ArticleService(store=store, mirror=mirror, config=config)

    app = FastAPI(title="Innovation Pulse API")  # pylint: disable=redefined-outer-name
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if isinstance(mirror, LocalOnlyMirror):
        app.mount(
            "/images",
            StaticFiles(directory=mirror.images_dir, check_dir=False),
            name="images"
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        """Turn any unhandled error into a 500 JSON response."""
        logger.error("Server error on %s %s: %s", request.method, request.url.path, exc)
        return error_response(500, "Internal server error")

    # ================== HEALTH ==================
    @app.get("/api/health")
    async def health_check():
        """Report that the server is up."""
        logger.info("GET /api/health")
        status = service.health()
        logger.info("GET /api/health - 200")
        return status

    # ================== ARTICLES API ==================
    @app.get("/api/articles")
    async def list_articles():
        """Get all articles."""
        logger.info("GET /api/articles")
        try:
            articles = service.list_articles()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("GET /api/articles - 500 %s", e)
            return error_response(500, "Failed to load articles")
        logger.info("GET /api/articles - 200")
        return articles

    @app.get("/api/articles/{article_id}")
    async def get_article(article_id: str):
        """Get a single article."""
        sanitized_id = sanitize_log_input(article_id)
        logger.info(f"GET /api/articles/{sanitized_id}")
        try:
            article = service.get_article(article_id)
        except ArticleNotFoundError:
            logger.warning(f"GET /api/articles/{sanitized_id} - 404 Article not found")
            return error_response(404, "Article not found")
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(f"GET /api/articles/{sanitized_id} - 500 {e}")
            return error_response(500, "Failed to load article")
        logger.info(f"GET /api/articles/{sanitized_id} - 200")
        return article

    @app.post("/api/articles")
    async def create_article(request: Request):
        """Create a new article."""
        logger.info("POST /api/articles")
        try:
            data = await request.json()
            article = service.create_article(data)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("POST /api/articles - 500 Error creating article: %s", e)
            return error_response(500, "Failed to create article")
        logger.info(f"POST /api/articles - 201 {sanitize_log_input(article['id'])}")
        return JSONResponse(status_code=201, content=article)

    @app.put("/api/articles/{article_id}")
    async def update_article(article_id: str, request: Request):
        """Update an existing article."""
        sanitized_id = sanitize_log_input(article_id)
        logger.info(f"PUT /api/articles/{sanitized_id}")
        try:
            data = await request.json()
            article = service.update_article(article_id, data)
        except ArticleNotFoundError:
            logger.warning(f"PUT /api/articles/{sanitized_id} - 404 Article not found")
            return error_response(404, "Article not found")
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(f"PUT /api/articles/{sanitized_id} - 500 Error updating article: {e}")
            return error_response(500, "Failed to update article")
        logger.info(f"PUT /api/articles/{sanitized_id} - 200")
        return article

    @app.delete("/api/articles/{article_id}")
    async def delete_article(article_id: str):
        """Delete an article."""
        sanitized_id = sanitize_log_input(article_id)
        logger.info(f"DELETE /api/articles/{sanitized_id}")
        try:
            service.delete_article(article_id)
        except ArticleNotFoundError:
            logger.warning(f"DELETE /api/articles/{sanitized_id} - 404 Article not found")
            return error_response(404, "Article not found")
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(f"DELETE /api/articles/{sanitized_id} - 500 Error deleting article: {e}")
            return error_response(500, "Failed to delete article")
        logger.info(f"DELETE /api/articles/{sanitized_id} - 200")
        return {"message": "Article deleted successfully"}

    # ================== IMAGES ==================
    @app.post("/api/upload-image")
    async def upload_image(request: Request):
        """Upload an image to the mirror without touching articles."""
        logger.info("POST /api/upload-image")
        try:
            data = await request.json()
            image_url = service.upload_image(data.get("imageData"), data.get("filename"))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("POST /api/upload-image - 500 Error uploading image: %s", e)
            return error_response(500, "Failed to upload image")
        logger.info("POST /api/upload-image - 200")
        return {"imageUrl": image_url}

    return app
