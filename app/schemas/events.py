from typing import Optional

from pydantic import BaseModel, ConfigDict


class EventPayload(BaseModel):
    """Form fields a UI event may carry. Handlers pick what they need."""

    model_config = ConfigDict(extra="ignore")

    post_id: Optional[str] = None
    slug: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    confirmed: Optional[str] = None

    @property
    def is_confirmed(self) -> bool:
        return (self.confirmed or "").lower() in {"yes", "true", "1"}

    def post_values(self) -> dict:
        return {
            "title": self.title or "",
            "summary": self.summary or "",
            "content": self.content or "",
            "author": self.author or "",
        }
