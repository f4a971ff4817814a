"""
rtjc relay entry point.
Listens for legacy rtjc lines on a TCP port and relays them to Telegram.

Usage:
    python -m rtjc_relay.main_listener
"""
import sys
import httpx
from .config import get_settings, load_pinned, Settings
from .log import setup_logging, get_logger
from .llm.client import OpenAISummary
from .pipeline.dispatch import RateLimitedDispatcher
from .pipeline.router import EnrichmentRouter
from .pipeline.summarizer import Summarizer
from .relay.listener import RtjcListener
from .relay.pins import PinClassifier
from .retrieval.extract import build_extractor
from .retrieval.remark import RemarkClient
from .store.cache import SummaryCache
from .telegram.client import TelegramSubmitter

setup_logging()
logger = get_logger("main")

REQUIRED = ("TELEGRAM_TOKEN", "TELEGRAM_CHAT_ID", "OPENAI_API_KEY")

def missing_settings(settings: Settings):
    return [name for name in REQUIRED if not getattr(settings, name)]

def build_listener(settings: Settings, http: httpx.Client) -> RtjcListener:
    """Wire all collaborators from settings."""
    if settings.CACHE_PERSIST:
        cache = SummaryCache.load(settings.CACHE_PATH)
        logger.info(f"Loaded {len(cache)} cached summaries from {settings.CACHE_PATH}")
    else:
        cache = SummaryCache()

    summarizer = Summarizer(
        extractor=build_extractor(settings, http),
        ai=OpenAISummary(
            api_key=settings.OPENAI_API_KEY,
            model=settings.MODEL_SUMMARY,
            max_tokens=settings.SUMMARY_MAX_TOKENS,
        ),
        cache=cache,
    )
    remark = RemarkClient(
        http,
        api_url=settings.REMARK_API,
        site=settings.REMARK_SITE,
        thread_pattern=settings.THREAD_LINK_PATTERN,
        exclude_negative=settings.EXCLUDE_NEGATIVE_COMMENTS,
    )
    router = EnrichmentRouter(
        summarizer,
        remark,
        thread_domain=settings.THREAD_HOST_DOMAIN,
        thread_pattern=settings.THREAD_LINK_PATTERN,
        marker=settings.SUMMARY_MARKER,
    )
    submitter = TelegramSubmitter(
        http,
        token=settings.TELEGRAM_TOKEN,
        chat_id=settings.TELEGRAM_CHAT_ID,
        api_url=settings.TELEGRAM_API_URL,
    )
    return RtjcListener(
        port=settings.LISTEN_PORT,
        submitter=submitter,
        pins=PinClassifier(load_pinned(settings.PINNED_PATH)),
        router=router,
        dispatcher=RateLimitedDispatcher(submitter),
    )

def main():
    settings = get_settings()
    missing = missing_settings(settings)
    if missing:
        logger.error(f"Missing required settings: {', '.join(missing)}")
        sys.exit(1)

    logger.info("Starting rtjc relay...")
    logger.info(f"Relaying to chat: {settings.TELEGRAM_CHAT_ID}")

    with httpx.Client(timeout=settings.HTTP_TIMEOUT) as http:
        listener = build_listener(settings, http)
        try:
            listener.listen()
        except OSError as e:
            logger.error(f"can't listen on {settings.LISTEN_PORT}, {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            logger.info("Stopping listener...")

if __name__ == "__main__":
    main()
