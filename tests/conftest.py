import datetime
import json

import httpx

from app.repos.blog_repo import BlogHTTPError, BlogNetworkError
from app.schemas.blog import Page, Post
from app.services.view_controller import ViewController
from app.settings import Settings

FIXED_TODAY = datetime.date(2024, 5, 17)


def make_post(post_id, **overrides) -> Post:
    data = {
        "id": post_id,
        "title": f"Post {post_id}",
        "summary": f"Summary {post_id}",
        "content": f"Content {post_id}",
        "author": "Ted",
        "date": "2024-01-0" + str(post_id)[-1],
    }
    data.update(overrides)
    return Post(**data)


class FakeBlogRepo:
    """
    In-memory repo stand-in. Records every call in order.
    Set fail_on={"list_posts": "network"} (or "http") to make a call raise.
    """

    def __init__(self, posts=None, pages=None, fail_on=None):
        self.posts = list(posts or [])
        self.pages = dict(pages or {})
        self.fail_on = dict(fail_on or {})
        self.calls = []
        self._next_id = max((int(p.id) for p in self.posts), default=0) + 1

    def _maybe_fail(self, name):
        kind = self.fail_on.get(name)
        if kind == "network":
            raise BlogNetworkError("connection refused")
        if kind == "http":
            raise BlogHTTPError(500)

    async def list_posts(self):
        self.calls.append(("list_posts",))
        self._maybe_fail("list_posts")
        # Stored order stands in for the server-side sort.
        return list(self.posts)

    async def get_post(self, post_id):
        self.calls.append(("get_post", post_id))
        self._maybe_fail("get_post")
        return next((p for p in self.posts if str(p.id) == str(post_id)), None)

    async def fetch_page(self, slug):
        self.calls.append(("fetch_page", slug))
        self._maybe_fail("fetch_page")
        page = self.pages.get(slug)
        return Page(slug=slug, **page) if page else None

    async def create_post(self, draft):
        self.calls.append(("create_post", draft))
        self._maybe_fail("create_post")
        post = Post(id=self._next_id, **draft.model_dump())
        self._next_id += 1
        self.posts.insert(0, post)
        return post

    async def update_post(self, post_id, post):
        self.calls.append(("update_post", post_id, post))
        self._maybe_fail("update_post")
        updated = Post(id=post_id, **post.model_dump())
        self.posts = [updated if str(p.id) == str(post_id) else p for p in self.posts]
        return updated

    async def delete_post(self, post_id):
        self.calls.append(("delete_post", post_id))
        self._maybe_fail("delete_post")
        self.posts = [p for p in self.posts if str(p.id) != str(post_id)]
        return True

    def call_names(self):
        return [call[0] for call in self.calls]


class FakePrompter:
    """
    Minimal prompter stand-in: answers confirm() with a fixed value.
    """

    def __init__(self, confirm_answer: bool = True):
        self.confirm_answer = confirm_answer
        self.alerts = []
        self.questions = []

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def confirm(self, message: str) -> bool:
        self.questions.append(message)
        return self.confirm_answer


def make_controller(repo=None, **settings_overrides) -> ViewController:
    return ViewController(
        repo or FakeBlogRepo(),
        settings_obj=Settings(**settings_overrides),
        today=lambda: FIXED_TODAY,
    )


class RecordingTransport:
    """
    httpx.MockTransport wrapper that keeps every request it saw.
    `handler` returns an httpx.Response for a request.
    """

    def __init__(self, handler):
        self.requests = []
        self._handler = handler
        self.transport = httpx.MockTransport(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self, base_url="http://backend.test") -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport, base_url=base_url)


def request_json(request: httpx.Request):
    return json.loads(request.content.decode("utf-8"))
