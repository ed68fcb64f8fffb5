from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.blog import Post, PostId


class View(str, Enum):
    HOME = "home"
    POST_DETAIL = "post-detail"
    STATIC_PAGE = "static-page"
    ADD_POST = "add-post"
    EDIT_POST = "edit-post"
    LOGIN = "login"
    ADMIN = "admin"


class AppState(BaseModel):
    """Transient client state. Nothing here survives a reload."""

    view: View = View.HOME
    posts: List[Post] = Field(default_factory=list)
    is_loading: bool = False
    is_authenticated: bool = False
    current_post_id: Optional[PostId] = None
    current_page_slug: Optional[str] = None
    # Where the add/edit forms return to after a successful save
    return_view: View = View.HOME

    def find_post(self, post_id: PostId) -> Optional[Post]:
        return next((p for p in self.posts if str(p.id) == str(post_id)), None)
