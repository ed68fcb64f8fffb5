import httpx
from fastapi import Depends, Request

from app.repos.blog_repo import BlogRepo
from app.services.sessions import ControllerRegistry, ViewSession
from app.services.view_controller import ViewController
from app.settings import Settings, settings

TAB_COOKIE = "blog_tab"


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def make_http_client(current_settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=current_settings.BLOG_API_URL,
        timeout=httpx.Timeout(current_settings.REQUEST_TIMEOUT_SECONDS),
    )


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_blog_repo(client: httpx.AsyncClient = Depends(get_http_client)) -> BlogRepo:
    return BlogRepo(client)


def get_controller_registry(request: Request) -> ControllerRegistry:
    registry = getattr(request.app.state, "controllers", None)
    if registry is None:
        registry = ControllerRegistry()
        request.app.state.controllers = registry
    return registry


def get_view_session(
    request: Request,
    registry: ControllerRegistry = Depends(get_controller_registry),
    repo: BlogRepo = Depends(get_blog_repo),
    current_settings: Settings = Depends(get_settings),
) -> ViewSession:
    """
    The state bag of the browser that sent this request. Each browser
    plays one open tab; an unknown or missing tab cookie starts afresh.
    """
    return registry.open(
        request.cookies.get(TAB_COOKIE),
        lambda: ViewController(repo, settings_obj=current_settings),
    )
