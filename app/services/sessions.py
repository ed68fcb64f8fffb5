import logging
import secrets
from collections import OrderedDict
from typing import Callable, NamedTuple, Optional

from app.services.view_controller import ViewController

logger = logging.getLogger(__name__)

MAX_SESSIONS = 512


class ViewSession(NamedTuple):
    tab_id: str
    controller: ViewController


class ControllerRegistry:
    """
    One ViewController (one AppState) per browser, keyed by a random tab id.
    Least recently used entries are dropped past `max_sessions`.
    """

    def __init__(self, max_sessions: int = MAX_SESSIONS):
        self.max_sessions = max_sessions
        self._controllers: "OrderedDict[str, ViewController]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def get(self, tab_id: Optional[str]) -> Optional[ViewController]:
        if not tab_id:
            return None
        controller = self._controllers.get(tab_id)
        if controller is not None:
            self._controllers.move_to_end(tab_id)
        return controller

    def open(
        self, tab_id: Optional[str], factory: Callable[[], ViewController]
    ) -> ViewSession:
        """Existing session for a known id; otherwise a fresh one under a new id."""
        controller = self.get(tab_id)
        if controller is not None:
            return ViewSession(tab_id, controller)

        new_id = secrets.token_urlsafe(24)
        self._controllers[new_id] = factory()
        self._prune()
        return ViewSession(new_id, self._controllers[new_id])

    def _prune(self) -> None:
        while len(self._controllers) > self.max_sessions:
            stale_id, _ = self._controllers.popitem(last=False)
            logger.debug(f"Dropped view session {stale_id[:6]}...")
