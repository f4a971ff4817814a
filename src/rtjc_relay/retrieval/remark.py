"""Remark42 client: loads a thread's comments and ranks the top-level ones.

Ranking keeps top-level, non-deleted comments (optionally only those with a
non-negative score), ordered by score descending and, for equal scores, by
creation time ascending.
"""

import re
from typing import Iterable, List
import httpx
from pydantic import ValidationError as PydanticValidationError
from ..errors import DecodeError, LinkFormatError, RemarkError
from ..log import get_logger
from ..schemas.comment import Comment, CommentsResponse

logger = get_logger("remark")

def rank_comments(comments: Iterable[Comment], exclude_negative: bool = True) -> List[Comment]:
    kept = []
    for c in comments:
        if not c.is_top_level or c.deleted:
            continue
        if exclude_negative and c.score < 0:
            continue
        kept.append(c)
    # sorted() is stable, so full ties keep their input order
    return sorted(kept, key=lambda c: (-c.score, c.timestamp.timestamp()))

class RemarkClient:
    def __init__(
        self,
        http: httpx.Client,
        api_url: str,
        site: str,
        thread_pattern: str,
        exclude_negative: bool = True,
    ):
        self.http = http
        self.api_url = api_url
        self.site = site
        self.thread_re = re.compile(thread_pattern)
        self.exclude_negative = exclude_negative

    def validate_thread_link(self, link: str):
        if not self.thread_re.search(link):
            raise LinkFormatError(link)

    def get_comments(self, thread_link: str) -> List[Comment]:
        """All comments of the thread, as returned by Remark42."""
        params = {"site": self.site, "url": thread_link, "sort": "-score", "format": "plain"}
        try:
            resp = self.http.get(self.api_url, params=params)
        except httpx.HTTPError as e:
            raise RemarkError(thread_link, f"can't get comments: {e}") from e
        if not resp.is_success:
            raise RemarkError(thread_link, f"can't get comments: {resp.status_code}")

        try:
            return CommentsResponse.model_validate_json(resp.content).comments
        except PydanticValidationError as e:
            raise DecodeError(thread_link, str(e)) from e

    def get_top_comments(self, thread_link: str) -> List[Comment]:
        self.validate_thread_link(thread_link)
        comments = self.get_comments(thread_link)
        top = rank_comments(comments, self.exclude_negative)
        logger.debug(f"{len(top)} of {len(comments)} comments ranked for {thread_link}")
        return top
