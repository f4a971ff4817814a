"""Link summaries: extract the article, summarize it with the LLM, cache the result.

Important: this isn't thread safe, the cache is shared without locking.
"""

from typing import Protocol
from ..errors import SummaryError
from ..log import get_logger
from ..retrieval.extract import Extractor
from ..rendering.telegram_format import render_summary
from ..schemas.summary import SummaryItem
from ..store.cache import SummaryCache

logger = get_logger("summarizer")

class TextSummarizer(Protocol):
    def summary(self, text: str) -> str:
        ...

class Summarizer:
    def __init__(self, extractor: Extractor, ai: TextSummarizer, cache: SummaryCache):
        self.extractor = extractor
        self.ai = ai
        self.cache = cache

    def summary(self, link: str) -> str:
        """
        Rendered summary for link, or "" when the article yields nothing usable.
        Cached links are served without any network call.
        """
        cached = self.cache.get(link)
        if cached is not None:
            logger.debug(f"summary for link loaded by cache: {link}")
            return render_summary(cached)

        item = self._summarize(link)
        if item.is_empty():
            logger.info(f"empty summary for {link}, not cached")
            return ""

        self.cache.put(link, item)
        return render_summary(item)

    def _summarize(self, link: str) -> SummaryItem:
        logger.debug(f"summary for link: {link}")
        article = self.extractor.extract(link)
        if not article.title or not article.content:
            return SummaryItem(title=article.title, content="")

        try:
            generated = self.ai.summary(article.title + " - " + article.content)
        except SummaryError as e:
            raise SummaryError(link, e.reason) from e
        return SummaryItem(title=article.title, content=generated)
