"""
HTTP server for the article store.
Exposes the article repository as a JSON API plus minimal reader pages.
"""
import html
import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from src.article_repository import ArticleRepository
from src.article_store_factory import create_article_store
from src.config import Config
from src.errors import (
    ArticleIOError,
    ArticleNotFoundError,
    ImageUploadError,
    InvalidArticleIdError,
)
from src.image_uploads import resolve_image_path, store_uploaded_image

# Configure site logger
logger = logging.getLogger('site')
logger.setLevel(logging.INFO)
logger.propagate = False

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


def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"Field '{key}' must be a string")
    return value


def _render_list_page(articles) -> str:
    items = []
    for article in articles:
        image = (
            f'<img src="{html.escape(article.image)}" alt="">' if article.image else ""
        )
        items.append(
            "<li>"
            f'<a href="/post/{html.escape(article.id)}">{html.escape(article.title)}</a>'
            f"{image}"
            f"<p>{html.escape(article.excerpt)}</p>"
            f"<small>{html.escape(article.created_at)}</small>"
            "</li>"
        )
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Articles</title></head>
<body>
  <h1>Articles</h1>
  <ul class="articles">{''.join(items)}</ul>
</body>
</html>
"""


def _render_detail_page(article) -> str:
    image = f'<img src="{html.escape(article.image)}" alt="">' if article.image else ""
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{html.escape(article.title)}</title></head>
<body>
  <article>
    <h1>{html.escape(article.title)}</h1>
    {image}
    <small>{html.escape(article.created_at)}</small>
    <div class="body">{article.body_html}</div>
  </article>
  <a href="/posts">All articles</a>
</body>
</html>
"""


def create_site_app(
    config: Optional[Config] = None,
    article_repository: Optional[ArticleRepository] = None,
    images_dir: Optional[str] = None,
) -> FastAPI:
    """
    Create the site FastAPI application.

    Args:
        config: Optional Config instance (created if not provided)
        article_repository: Optional repository (defaults to one over the factory-created store)
        images_dir: Directory for uploaded images (defaults to IMAGES_DIR)

    Returns:
        FastAPI application instance
    """
    config = config or Config()
    app = FastAPI()  # pylint: disable=redefined-outer-name

    if article_repository is None:
        article_repository = ArticleRepository(
            create_article_store(config=config),
            excerpt_length=config.excerpt_length,
        )
    images_dir = images_dir or config.images_dir
    os.makedirs(images_dir, exist_ok=True)

    def load_detail(article_id: str, route: str):
        """Fetch an article or raise the matching HTTPException."""
        try:
            return article_repository.get_article(article_id)
        except (ArticleNotFoundError, InvalidArticleIdError) as e:
            logger.warning(f"{route} - 404 Article not found")
            raise HTTPException(status_code=404, detail="Article not found") from e
        except ArticleIOError as e:
            logger.error(f"{route} - 500 {sanitize_log_input(e)}")
            raise HTTPException(status_code=500, detail="Could not read article") from e

    def save(article_id: Optional[str], payload: Dict[str, Any], route: str) -> str:
        """Validate a JSON payload and save it through the repository."""
        body = payload.get("body")
        if not isinstance(body, str):
            logger.warning(f"{route} - 400 Missing body")
            raise HTTPException(status_code=400, detail="Field 'body' is required")
        try:
            return article_repository.save_article(
                article_id=article_id,
                title=_optional_str(payload, "title"),
                body=body,
                image=_optional_str(payload, "image"),
            )
        except InvalidArticleIdError as e:
            logger.warning(f"{route} - 400 Invalid article id")
            raise HTTPException(status_code=400, detail="Invalid article id") from e
        except ArticleIOError as e:
            logger.error(f"{route} - 500 {sanitize_log_input(e)}")
            raise HTTPException(status_code=500, detail="Could not save article") from e

    def remove(article_id: str, route: str) -> None:
        """Delete an article or raise the matching HTTPException."""
        try:
            article_repository.delete_article(article_id)
        except (ArticleNotFoundError, InvalidArticleIdError) as e:
            logger.warning(f"{route} - 404 Article not found")
            raise HTTPException(status_code=404, detail="Article not found") from e
        except ArticleIOError as e:
            logger.error(f"{route} - 500 {sanitize_log_input(e)}")
            raise HTTPException(status_code=500, detail="Could not delete article") from e

    async def store_image(image: UploadFile, route: str) -> str:
        """Validate and store an upload, mapping rejections to 400."""
        data = await image.read()
        try:
            return store_uploaded_image(
                images_dir,
                image.filename or "",
                image.content_type,
                data,
                max_bytes=config.max_image_size,
            )
        except ImageUploadError as e:
            logger.warning(f"{route} - 400 {sanitize_log_input(e)}")
            raise HTTPException(status_code=400, detail=str(e)) from e

    # ================== ARTICLE API ==================
    @app.get("/api/articles")
    async def get_articles():
        """Get all articles, newest first."""
        logger.info("GET /api/articles")
        try:
            articles = article_repository.list_articles()
        except ArticleIOError as e:
            logger.error(f"GET /api/articles - 500 {sanitize_log_input(e)}")
            raise HTTPException(status_code=500, detail="Could not list articles") from e
        return {"articles": [a.to_dict() for a in articles]}

    @app.get("/api/articles/{article_id}")
    async def get_article(article_id: str):
        """Get one article with raw and rendered body."""
        route = f"GET /api/articles/{sanitize_log_input(article_id)}"
        logger.info(route)
        return load_detail(article_id, route).to_dict()

    @app.post("/api/articles")
    async def create_article(request: Request):
        """Create an article, or save under a caller-supplied id."""
        logger.info("POST /api/articles")
        payload = await request.json()
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Expected a JSON object")
        article_id = save(_optional_str(payload, "id"), payload, "POST /api/articles")
        logger.info(f"POST /api/articles - 200 {sanitize_log_input(article_id)}")
        return {"status": "ok", "article_id": article_id}

    @app.put("/api/articles/{article_id}")
    async def update_article(article_id: str, request: Request):
        """Update an existing article."""
        route = f"PUT /api/articles/{sanitize_log_input(article_id)}"
        logger.info(route)
        try:
            exists = article_repository.article_exists(article_id)
        except InvalidArticleIdError:
            exists = False
        if not exists:
            logger.warning(f"{route} - 404 Article not found")
            raise HTTPException(status_code=404, detail="Article not found")

        payload = await request.json()
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Expected a JSON object")
        save(article_id, payload, route)
        logger.info(f"{route} - 200")
        return {"status": "ok", "article_id": article_id}

    @app.delete("/api/articles/{article_id}")
    async def delete_article(article_id: str):
        """Delete an article."""
        route = f"DELETE /api/articles/{sanitize_log_input(article_id)}"
        logger.info(route)
        remove(article_id, route)
        logger.info(f"{route} - 200")
        return {"status": "ok", "article_id": article_id}

    @app.post("/api/images")
    async def upload_image(image: UploadFile = File(...)):
        """Store an uploaded image and return its public path."""
        route = "POST /api/images"
        logger.info(f"{route} {sanitize_log_input(image.filename or '')}")
        path = await store_image(image, route)
        return {"status": "ok", "image": path}

    # ================== EDITOR FORM ==================
    @app.post("/save-article")
    async def save_article_form(
        title: str = Form(""),
        body: str = Form(""),
        article_id: str = Form("", alias="articleId"),
        existing_image: str = Form("", alias="existingImage"),
        image: Optional[UploadFile] = File(None),
    ):
        """Save the editor form, with an optional new image, then show the article."""
        route = "POST /save-article"
        logger.info(route)
        uploaded = None
        if image is not None and image.filename:
            uploaded = await store_image(image, route)
        payload = {
            "title": title,
            "body": body,
            "image": resolve_image_path(uploaded, existing_image),
        }
        saved_id = save(article_id or None, payload, route)
        logger.info(f"{route} - 303 {sanitize_log_input(saved_id)}")
        return RedirectResponse(url=f"/post/{saved_id}", status_code=303)

    @app.post("/delete-article/{article_id}")
    async def delete_article_form(article_id: str):
        """Delete an article from the reader page, then show the feed."""
        route = f"POST /delete-article/{sanitize_log_input(article_id)}"
        logger.info(route)
        remove(article_id, route)
        return RedirectResponse(url="/posts", status_code=303)

    # ================== READER PAGES ==================
    @app.get("/posts", response_class=HTMLResponse)
    async def posts_page():
        """Article feed page."""
        logger.info("GET /posts")
        try:
            articles = article_repository.list_articles()
        except ArticleIOError as e:
            logger.error(f"GET /posts - 500 {sanitize_log_input(e)}")
            raise HTTPException(status_code=500, detail="Could not list articles") from e
        return HTMLResponse(content=_render_list_page(articles))

    @app.get("/post/{article_id}", response_class=HTMLResponse)
    async def post_page(article_id: str):
        """Article reader page."""
        route = f"GET /post/{sanitize_log_input(article_id)}"
        logger.info(route)
        return HTMLResponse(content=_render_detail_page(load_detail(article_id, route)))

    app.mount("/images", StaticFiles(directory=images_dir, check_dir=False), name="images")

    return app
