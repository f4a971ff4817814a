"""Content extractors: resolve a link to its title and main text.

RemoteExtractor calls an external readability-style service.
LocalExtractor downloads the page itself and runs trafilatura on it.
"""

from typing import Protocol
import httpx
import trafilatura
from ..errors import DecodeError, ExtractionError
from ..log import get_logger
from ..schemas.summary import Article

logger = get_logger("extract")

USER_AGENT = "RtjcRelay/1.0 (+https://radio-t.com)"

class Extractor(Protocol):
    def extract(self, link: str) -> Article:
        ...

class RemoteExtractor:
    """
    GET {api_url}?token=...&url=... returning a JSON object.
    Field names differ between service revisions, so both are configurable.
    """

    def __init__(
        self,
        http: httpx.Client,
        api_url: str,
        token: str,
        title_field: str = "title",
        content_field: str = "content",
    ):
        self.http = http
        self.api_url = api_url
        self.token = token
        self.title_field = title_field
        self.content_field = content_field

    def extract(self, link: str) -> Article:
        try:
            resp = self.http.get(self.api_url, params={"token": self.token, "url": link})
        except httpx.HTTPError as e:
            raise ExtractionError(link, f"can't get content: {e}") from e
        if not resp.is_success:
            raise ExtractionError(link, f"can't get content: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(link, str(e)) from e
        if not isinstance(data, dict):
            raise DecodeError(link, f"expected an object, got {type(data).__name__}")

        title = data.get(self.title_field) or ""
        content = data.get(self.content_field) or ""
        if not isinstance(title, str) or not isinstance(content, str):
            raise DecodeError(link, f"{self.title_field}/{self.content_field} must be strings")
        return Article(title=title, content=content)

class LocalExtractor:
    def __init__(self, http: httpx.Client):
        self.http = http

    def extract(self, link: str) -> Article:
        try:
            resp = self.http.get(link, headers={"User-Agent": USER_AGENT}, follow_redirects=True)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise ExtractionError(link, f"can't get content: {e}") from e

        html = resp.text
        text = trafilatura.extract(html, include_comments=False, include_tables=True, url=link)
        meta = trafilatura.extract_metadata(html, default_url=link)
        title = meta.title if meta and meta.title else ""
        return Article(title=title, content=text or "")

def build_extractor(settings, http: httpx.Client) -> Extractor:
    if settings.EXTRACTOR_BACKEND == "local":
        return LocalExtractor(http)
    return RemoteExtractor(
        http,
        settings.UR_API,
        settings.UR_TOKEN,
        title_field=settings.EXTRACTOR_TITLE_FIELD,
        content_field=settings.EXTRACTOR_CONTENT_FIELD,
    )
