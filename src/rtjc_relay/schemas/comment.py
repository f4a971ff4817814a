"""Pydantic schema for Remark42 comments.

Only the fields the relay reads are declared; everything else in the
payload is ignored.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field
from typing import List

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

class CommentUser(BaseModel):
    name: str = ""
    admin: bool = False
    verified: bool = False
    paid_sub: bool = False

class Comment(BaseModel):
    parent_id: str = Field("", alias="pid")
    text: str = ""
    orig: str = ""  # raw source, never rendered as HTML (not sanitized)
    user: CommentUser = Field(default_factory=CommentUser)
    score: int = 0
    deleted: bool = Field(False, alias="delete")
    timestamp: datetime = Field(_EPOCH, alias="time")

    model_config = {"populate_by_name": True}

    @property
    def is_top_level(self) -> bool:
        return self.parent_id == ""

class CommentsResponse(BaseModel):
    comments: List[Comment] = []
