import logging
from typing import Awaitable, Callable, Dict, List

from app.schemas.events import EventPayload
from app.services.screen import Prompter
from app.services.view_controller import ViewController

logger = logging.getLogger(__name__)

Handler = Callable[[ViewController, EventPayload, Prompter], Awaitable[None]]


class UnknownEventError(KeyError):
    pass


class InvalidEventPayload(ValueError):
    pass


class EventRegistry:
    """Maps UI event names to the controller handler that serves them."""

    def __init__(self):
        self._handlers: Dict[str, Handler] = {}

    def on(self, name: str) -> Callable[[Handler], Handler]:
        def register(fn: Handler) -> Handler:
            if name in self._handlers:
                raise ValueError(f"Event {name!r} already registered")
            self._handlers[name] = fn
            return fn

        return register

    def names(self) -> List[str]:
        return sorted(self._handlers)

    async def dispatch(
        self,
        controller: ViewController,
        name: str,
        payload: EventPayload,
        prompter: Prompter,
    ) -> None:
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownEventError(name)
        logger.debug(f"Dispatching event {name}")
        await handler(controller, payload, prompter)


def _require(value, field: str) -> str:
    if not value:
        raise InvalidEventPayload(f"Missing field: {field}")
    return value


events = EventRegistry()


@events.on("show-home")
async def handle_show_home(controller, payload, prompter):
    await controller.show_home()


@events.on("show-post")
async def handle_show_post(controller, payload, prompter):
    await controller.show_post(_require(payload.post_id, "post_id"))


@events.on("show-page")
async def handle_show_page(controller, payload, prompter):
    await controller.show_page(_require(payload.slug, "slug"))


@events.on("show-login")
async def handle_show_login(controller, payload, prompter):
    await controller.show_login()


@events.on("submit-login")
async def handle_submit_login(controller, payload, prompter):
    await controller.submit_login(payload.username or "", payload.password or "", prompter)


@events.on("logout")
async def handle_logout(controller, payload, prompter):
    await controller.logout()


@events.on("show-admin")
async def handle_show_admin(controller, payload, prompter):
    await controller.show_admin()


@events.on("show-add-post")
async def handle_show_add_post(controller, payload, prompter):
    await controller.show_add_post()


@events.on("submit-add-post")
async def handle_submit_add_post(controller, payload, prompter):
    await controller.submit_add_post(payload.post_values(), prompter)


@events.on("show-edit-post")
async def handle_show_edit_post(controller, payload, prompter):
    await controller.show_edit_post(_require(payload.post_id, "post_id"))


@events.on("submit-edit-post")
async def handle_submit_edit_post(controller, payload, prompter):
    await controller.submit_edit_post(
        _require(payload.post_id, "post_id"), payload.post_values(), prompter
    )


@events.on("delete-post")
async def handle_delete_post(controller, payload, prompter):
    await controller.delete_post(_require(payload.post_id, "post_id"), prompter)
