"""Enrichment routing for incoming rtjc lines.

Lines starting with the summary marker get AI summaries:
- a link to a discussion thread (prep-NNN article) fans out into its top
  comments, each with a summary of the link it mentions;
- any other link is summarized directly.

Comment batches are produced by a background thread into a bounded queue,
so the first message can be delivered while later ones are still being
summarized.
"""

import queue
import re
import threading
from typing import Iterator, List, Protocol
from ..errors import LinkFormatError, NoLinkError
from ..log import get_logger
from ..retrieval.url import first_link, is_thread_host
from ..rendering.telegram_format import error_placeholder, join_blocks, numbered, render_comment
from ..schemas.comment import Comment

logger = get_logger("router")

STREAM_BUFFER = 8
_PUT_TIMEOUT = 0.5
_DONE = object()

class LinkSummarizer(Protocol):
    def summary(self, link: str) -> str:
        ...

class CommentSource(Protocol):
    def get_top_comments(self, thread_link: str) -> List[Comment]:
        ...

class EnrichmentRouter:
    def __init__(
        self,
        summarizer: LinkSummarizer,
        comments: CommentSource,
        thread_domain: str,
        thread_pattern: str,
        marker: str = "⚠",
        buffer_size: int = STREAM_BUFFER,
    ):
        self.summarizer = summarizer
        self.comments = comments
        self.thread_domain = thread_domain
        self.thread_re = re.compile(thread_pattern)
        self.marker = marker
        self.buffer_size = buffer_size

    def route(self, line: str) -> Iterator[str]:
        """
        Rendered messages to send for line, in order.
        Raises NoLinkError, LinkFormatError or an upstream error when nothing can be produced.
        """
        if not line.startswith(self.marker):
            return iter(())

        link = first_link(line)
        logger.debug(f"link found: {link!r}")
        if not link:
            raise NoLinkError(line)

        if is_thread_host(link, self.thread_domain):
            return self._thread_messages(link)

        return iter([self.summarizer.summary(link)])

    def _thread_messages(self, thread_link: str) -> Iterator[str]:
        if not self.thread_re.search(thread_link):
            raise LinkFormatError(thread_link)

        comments = self.comments.get_top_comments(thread_link)
        logger.info(f"{len(comments)} top comments for {thread_link}")
        return self._stream(comments)

    def _stream(self, comments: List[Comment]) -> Iterator[str]:
        q: queue.Queue = queue.Queue(maxsize=self.buffer_size)
        stop = threading.Event()
        producer = threading.Thread(
            target=self._produce, args=(comments, q, stop), name="comment-summaries", daemon=True
        )
        producer.start()
        try:
            while True:
                msg = q.get()
                if msg is _DONE:
                    return
                yield msg
        finally:
            # consumer gone (exhausted or closed early), let the producer quit
            stop.set()

    def _produce(self, comments: List[Comment], q: queue.Queue, stop: threading.Event):
        total = len(comments)
        try:
            for i, comment in enumerate(comments, 1):
                if stop.is_set():
                    return
                msg = numbered(i, total, self._render_with_summary(comment))
                if not _put(q, msg, stop):
                    return
        finally:
            _put(q, _DONE, stop)

    def _render_with_summary(self, comment: Comment) -> str:
        rendered = render_comment(comment)
        link = first_link(comment.text)
        if not link or is_thread_host(link, self.thread_domain):
            return rendered

        try:
            summary = self.summarizer.summary(link)
        except Exception as e:
            logger.warning(f"can't get summary for {link}: {e}")
            summary = error_placeholder(e)
        return join_blocks([rendered, summary])

def _put(q: queue.Queue, item, stop: threading.Event) -> bool:
    while not stop.is_set():
        try:
            q.put(item, timeout=_PUT_TIMEOUT)
            return True
        except queue.Full:
            continue
    return False
