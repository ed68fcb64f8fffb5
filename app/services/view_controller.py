import datetime
import logging
from typing import Callable, Optional

from pydantic import ValidationError

from app.repos.blog_repo import BlogApiError, BlogRepo
from app.schemas.blog import PostDraft, PostFields, PostId
from app.schemas.view_state import AppState, View
from app.services import renderer
from app.services.screen import Prompter, Screen
from app.settings import Settings, settings

logger = logging.getLogger(__name__)

BACK_EVENTS = {View.ADMIN: "show-admin", View.HOME: "show-home"}


def utc_today(clock: Callable[..., datetime.datetime] = datetime.datetime.now) -> datetime.date:
    """Calendar date in UTC, whatever the host timezone."""
    return clock(datetime.timezone.utc).date()


class ViewController:
    """
    Owns the application state and the content region.

    Each public coroutine handles one UI event: it may await the repo,
    then replaces the whole content region. Apart from the loading flag,
    nothing is written to the state before a fetch has resolved.
    """

    def __init__(
        self,
        repo: BlogRepo,
        screen: Optional[Screen] = None,
        *,
        settings_obj: Settings = settings,
        today: Callable[[], datetime.date] = utc_today,
    ):
        self.repo = repo
        self.settings = settings_obj
        self.screen = screen or Screen(title=settings_obj.SITE_TITLE)
        self.today = today
        self.state = AppState()

    def reset(self) -> None:
        """A reload: drop everything, including the session."""
        self.state = AppState()
        self.screen.replace("")

    async def init(self) -> None:
        await self.show_home()

    # --- public views ---

    async def show_home(self) -> None:
        posts = await self._load_posts()
        if posts is None:
            return
        self.state.posts = posts
        self.state.view = View.HOME
        self.screen.replace(renderer.render_home(posts))

    async def show_post(self, post_id: PostId) -> None:
        post = self.state.find_post(post_id)
        self.state.view = View.POST_DETAIL
        self.state.current_post_id = post.id if post else None
        self.screen.replace(renderer.render_post_detail(post))

    async def show_page(self, slug: str) -> None:
        self._start_loading()
        try:
            page = await self.repo.fetch_page(slug)
        except BlogApiError as e:
            logger.error(f"Failed to fetch page {slug}: {e}")
            self.screen.replace(renderer.PAGE_ERROR_HTML)
            return
        finally:
            self.state.is_loading = False

        self.state.view = View.STATIC_PAGE
        self.state.current_page_slug = slug
        self.screen.replace(renderer.render_page(page))

    # --- session ---

    async def show_login(self) -> None:
        self.state.view = View.LOGIN
        self.screen.replace(renderer.render_login())

    async def submit_login(self, username: str, password: str, prompter: Prompter) -> None:
        if (
            username == self.settings.ADMIN_USERNAME
            and password == self.settings.ADMIN_PASSWORD
        ):
            logger.info("Admin logged in")
            self.state.is_authenticated = True
            await self.show_admin()
            return

        logger.warning(f"Failed login attempt for user {username!r}")
        self.state.is_authenticated = False
        prompter.alert("Invalid username or password.")
        self.state.view = View.LOGIN
        self.screen.replace(renderer.render_login(username))

    async def logout(self) -> None:
        self.state.is_authenticated = False
        await self.show_home()

    # --- admin ---

    async def show_admin(self) -> None:
        if not self._require_login():
            return
        posts = await self._load_posts()
        if posts is None:
            return
        self.state.posts = posts
        self.state.view = View.ADMIN
        self.screen.replace(renderer.render_admin(posts))

    async def show_add_post(self) -> None:
        if not self._require_login():
            return
        self.state.return_view = self._origin()
        self.state.view = View.ADD_POST
        self.screen.replace(renderer.render_add_post(self._back_event()))

    async def submit_add_post(self, values: dict, prompter: Prompter) -> None:
        if not self._require_login():
            return
        fields = self._validate_fields(values, prompter)
        if fields is None:
            self.screen.replace(renderer.render_add_post(self._back_event(), values))
            return

        draft = PostDraft(**fields.model_dump(), date=self.today().isoformat())
        try:
            created = await self.repo.create_post(draft)
        except BlogApiError as e:
            logger.error(f"Failed to create post: {e}")
            prompter.alert("Failed to create post. Please try again.")
            self.screen.replace(renderer.render_add_post(self._back_event(), values))
            return

        logger.info(f"Created post {created.id}")
        await self._return_from_form()

    async def show_edit_post(self, post_id: PostId) -> None:
        if not self._require_login():
            return
        post = self.state.find_post(post_id)
        if post is None:
            try:
                post = await self.repo.get_post(post_id)
            except BlogApiError as e:
                logger.error(f"Failed to fetch post {post_id}: {e}")
                self.screen.replace(renderer.POST_ERROR_HTML)
                return

        self.state.return_view = self._origin()
        self.state.view = View.EDIT_POST
        self.state.current_post_id = post.id if post else None
        self.screen.replace(renderer.render_edit_post(post, self._back_event()))

    async def submit_edit_post(
        self, post_id: PostId, values: dict, prompter: Prompter
    ) -> None:
        if not self._require_login():
            return
        try:
            original = self.state.find_post(post_id) or await self.repo.get_post(post_id)
        except BlogApiError as e:
            logger.error(f"Failed to fetch post {post_id}: {e}")
            prompter.alert("Failed to update post. Please try again.")
            return
        if original is None:
            prompter.alert("Post not found.")
            self.screen.replace(renderer.POST_NOT_FOUND_HTML)
            return

        fields = self._validate_fields(values, prompter)
        if fields is None:
            self.screen.replace(
                renderer.render_edit_post(original, self._back_event(), values)
            )
            return

        # Full replacement; the date always comes from the stored post.
        replacement = PostDraft(**fields.model_dump(), date=original.date)
        try:
            await self.repo.update_post(original.id, replacement)
        except BlogApiError as e:
            logger.error(f"Failed to update post {original.id}: {e}")
            prompter.alert("Failed to update post. Please try again.")
            self.screen.replace(
                renderer.render_edit_post(original, self._back_event(), values)
            )
            return

        logger.info(f"Updated post {original.id}")
        await self._return_from_form()

    async def delete_post(self, post_id: PostId, prompter: Prompter) -> None:
        if not self._require_login():
            return
        if not prompter.confirm("Are you sure you want to delete this post?"):
            return

        try:
            await self.repo.delete_post(post_id)
        except BlogApiError as e:
            logger.error(f"Failed to delete post {post_id}: {e}")
            prompter.alert("Failed to delete post. Please try again.")
            return

        logger.info(f"Deleted post {post_id}")
        await self.show_admin()

    # --- helpers ---

    async def _load_posts(self):
        """List fetch behind the loading placeholder; None when it failed."""
        self._start_loading()
        try:
            return await self.repo.list_posts()
        except BlogApiError as e:
            logger.error(f"Failed to fetch posts: {e}")
            self.screen.replace(renderer.POSTS_ERROR_HTML)
            return None
        finally:
            self.state.is_loading = False

    def _start_loading(self) -> None:
        self.state.is_loading = True
        self.screen.replace(renderer.render_loading())

    def _require_login(self) -> bool:
        if self.state.is_authenticated:
            return True
        self.state.view = View.LOGIN
        self.screen.replace(renderer.render_login())
        return False

    def _origin(self) -> View:
        if self.state.view in (View.ADD_POST, View.EDIT_POST):
            return self.state.return_view
        return View.ADMIN if self.state.view == View.ADMIN else View.HOME

    def _back_event(self) -> str:
        return BACK_EVENTS[self.state.return_view]

    async def _return_from_form(self) -> None:
        if self.state.return_view == View.ADMIN:
            await self.show_admin()
        else:
            await self.show_home()

    @staticmethod
    def _validate_fields(values: dict, prompter: Prompter) -> Optional[PostFields]:
        try:
            return PostFields(**{name: values.get(name, "") for name in PostFields.model_fields})
        except ValidationError:
            prompter.alert("All fields are required.")
            return None
