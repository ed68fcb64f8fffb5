import logging
from typing import List, Protocol

logger = logging.getLogger(__name__)


class Prompter(Protocol):
    def alert(self, message: str) -> None: ...

    def confirm(self, message: str) -> bool: ...


class Screen:
    """The content region. Every render replaces it whole."""

    def __init__(self, title: str = ""):
        self.title = title
        self.content = ""
        self.scroll_top = 0

    def replace(self, content: str) -> None:
        self.content = content
        self.scroll_top = 0


class RecordingPrompter:
    """
    Prompter for one request: alerts are collected for the response,
    confirm answers with what the browser already sent.
    """

    def __init__(self, confirmed: bool = False):
        self.confirmed = confirmed
        self.alerts: List[str] = []
        self.questions: List[str] = []

    def alert(self, message: str) -> None:
        logger.debug(f"Alert: {message}")
        self.alerts.append(message)

    def confirm(self, message: str) -> bool:
        self.questions.append(message)
        return self.confirmed
