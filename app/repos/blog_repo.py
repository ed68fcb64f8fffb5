import logging
import urllib.parse
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from app.schemas.blog import Page, Post, PostDraft, PostId

logger = logging.getLogger(__name__)


class BlogApiError(Exception):
    """Any failure talking to the blog backend."""


class BlogHTTPError(BlogApiError):
    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP error! status: {status_code}")


class BlogNetworkError(BlogApiError):
    """The request never completed (connection refused, timeout, ...)."""


class BlogRepo:
    """
    Client for the json-server style blog backend.
    Every call makes exactly one request; errors are raised, never retried.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def list_posts(self) -> List[Post]:
        logger.info(f"Fetching posts from {self._url('/posts')}...")
        response = await self._send(
            "GET", "/posts", params={"_sort": "id", "_order": "desc"}
        )
        data = self._json(response)
        if not isinstance(data, list):
            raise BlogApiError(f"Unexpected posts payload: {type(data).__name__}")
        return [self._to_post(item) for item in data]

    async def get_post(self, post_id: PostId) -> Optional[Post]:
        logger.info(f"Fetching post {post_id}...")
        response = await self._send("GET", _post_path(post_id), allow_not_found=True)
        if response.status_code == 404:
            return None
        return self._to_post(self._json(response))

    async def fetch_page(self, slug: str) -> Optional[Page]:
        """
        The backend only serves the whole `pages` object, so fetch it
        and pick the slug out locally.
        """
        logger.info(f"Fetching page {slug}...")
        response = await self._send("GET", "/pages")
        pages = self._json(response)
        if not isinstance(pages, dict):
            raise BlogApiError(f"Unexpected pages payload: {type(pages).__name__}")

        page = pages.get(slug)
        if not page:
            return None
        try:
            return Page(slug=slug, **page)
        except (TypeError, ValidationError) as e:
            raise BlogApiError(f"Invalid page {slug}: {e}") from e

    async def create_post(self, draft: PostDraft) -> Post:
        logger.info(f"Posting to {self._url('/posts')}...")
        response = await self._send("POST", "/posts", json=draft.model_dump())
        return self._to_post(self._json(response))

    async def update_post(self, post_id: PostId, post: PostDraft) -> Post:
        logger.info(f"Updating post {post_id}...")
        payload = {**post.model_dump(exclude={"id"}), "id": post_id}
        response = await self._send("PUT", _post_path(post_id), json=payload)
        return self._to_post(self._json(response))

    async def delete_post(self, post_id: PostId) -> bool:
        logger.info(f"Deleting post {post_id}...")
        await self._send("DELETE", _post_path(post_id))
        return True

    async def _send(
        self, method: str, path: str, *, allow_not_found: bool = False, **kwargs
    ) -> httpx.Response:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"HTTP connection error on {method} {path}: {e}")
            raise BlogNetworkError(str(e)) from e

        if response.is_success or (allow_not_found and response.status_code == 404):
            return response
        raise BlogHTTPError(response.status_code, str(response.request.url))

    def _url(self, path: str) -> str:
        return f"{str(self.client.base_url).rstrip('/')}{path}"

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise BlogApiError(f"Invalid JSON from {response.request.url}") from e

    @staticmethod
    def _to_post(item: Any) -> Post:
        try:
            return Post.model_validate(item)
        except ValidationError as e:
            raise BlogApiError(f"Invalid post payload: {e}") from e


def _post_path(post_id: PostId) -> str:
    # Ids arrive from form posts; keep them a single path segment.
    return f"/posts/{urllib.parse.quote(str(post_id), safe='')}"
