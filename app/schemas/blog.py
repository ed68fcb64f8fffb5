from typing import Union

from pydantic import BaseModel, ConfigDict, Field

PostId = Union[int, str]


class PostDraft(BaseModel):
    title: str
    summary: str
    content: str
    author: str
    date: str  # ISO calendar date, e.g. 2024-05-01


class Post(PostDraft):
    id: PostId


class PostFields(BaseModel):
    """Fields a user fills in on the add/edit forms."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    content: str = Field(min_length=1)
    author: str = Field(min_length=1)


class Page(BaseModel):
    slug: str
    title: str
    content: str
