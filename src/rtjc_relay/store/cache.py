"""Summary cache: link -> SummaryItem, optionally snapshotted to a JSON file.

Keys are exact link strings, no URL normalization. The cache is not
thread safe; one writer per process is assumed.
"""

import json
from pathlib import Path
from typing import Dict, Optional
from pydantic import ValidationError as PydanticValidationError
from ..log import get_logger
from ..schemas.summary import SummaryItem

logger = get_logger("cache")

class SummaryCache:
    def __init__(self, path: Optional[str] = None):
        # path=None keeps the cache in memory only
        self.path = Path(path) if path else None
        self.summaries: Dict[str, SummaryItem] = {}

    @classmethod
    def load(cls, path: str) -> "SummaryCache":
        """Cache backed by path; starts empty if the snapshot is missing or unreadable."""
        cache = cls(path)
        try:
            raw = cache.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"can't open cache file, {e}")
            return cache
        try:
            data = json.loads(raw)
            cache.summaries = {
                link: SummaryItem.model_validate(item)
                for link, item in (data.get("Summaries") or {}).items()
            }
        except (ValueError, AttributeError, PydanticValidationError) as e:
            logger.warning(f"can't unmarshal cache file, {e}")
        return cache

    def get(self, link: str) -> Optional[SummaryItem]:
        return self.summaries.get(link)

    def put(self, link: str, item: SummaryItem):
        self.summaries[link] = item
        if self.path is None:
            return
        logger.debug(f"summary for link saved in cache: {link}")
        try:
            self.save()
        except OSError as e:
            logger.warning(f"cache saving problem: {e}")

    def save(self):
        data = {
            "Summaries": {
                link: item.model_dump(by_alias=True) for link, item in self.summaries.items()
            }
        }
        self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        self.path.chmod(0o600)

    def __contains__(self, link: str) -> bool:
        return link in self.summaries

    def __len__(self) -> int:
        return len(self.summaries)
