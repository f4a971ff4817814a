"""Telegram HTML formatting for comments and summaries.

Telegram's HTML parse mode accepts a small set of tags; everything else
must be escaped or stripped before sending.
"""

from __future__ import annotations

import re
from typing import List

from rtjc_relay.schemas.comment import Comment
from rtjc_relay.schemas.summary import SummaryItem

# Tags Telegram renders in parse_mode=HTML
ALLOWED_TAGS = {"b", "strong", "i", "em", "u", "ins", "s", "strike", "del", "a", "code", "pre"}

_TAG_RE = re.compile(r"<(/?\w[^>]*)>")
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_P_OPEN_RE = re.compile(r"<p(\s[^>]*)?>", re.IGNORECASE)
_P_CLOSE_RE = re.compile(r"</p>", re.IGNORECASE)
_BLANKS_RE = re.compile(r"\n{3,}")


def escape_html(text: str) -> str:
    """Escape the three characters Telegram HTML treats specially."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def telegram_supported_html(html: str) -> str:
    """
    Reduce arbitrary comment HTML to what Telegram accepts.
    Paragraphs and <br> become line breaks, unsupported tags are dropped
    but their inner text is kept.
    """
    text = _BR_RE.sub("\n", html)
    text = _P_OPEN_RE.sub("", text)
    text = _P_CLOSE_RE.sub("\n\n", text)

    def _strip_unsupported(match: re.Match) -> str:
        tag = match.group(1).split()[0].strip("/").lower()
        if tag in ALLOWED_TAGS:
            return match.group(0)
        return ""

    text = _TAG_RE.sub(_strip_unsupported, text)
    text = _BLANKS_RE.sub("\n\n", text)
    return text.strip()


def render_comment(comment: Comment) -> str:
    user = escape_html(comment.user.name)
    text = telegram_supported_html(comment.text)
    return f"<b>{comment.score:+d}</b> от <b>{user}</b>\n<i>{text}</i>"


def render_summary(item: SummaryItem) -> str:
    return escape_html(item.title) + "\n\n" + escape_html(item.content)


def join_blocks(blocks: List[str]) -> str:
    """Blank line between non-empty blocks."""
    return "\n\n".join(b for b in blocks if b)


def numbered(index: int, total: int, text: str) -> str:
    """Prefix a batch message with its 1-based position, e.g. "[2/5] "."""
    return f"[{index}/{total}] {text}"


def error_placeholder(err: Exception) -> str:
    return f"<code>Error: {escape_html(str(err))}</code>"
