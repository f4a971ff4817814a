import pytest
import os
from datetime import datetime, timedelta, timezone
from typing import Callable
from unittest.mock import MagicMock
import httpx
from dotenv import load_dotenv
from rtjc_relay.schemas.comment import Comment, CommentUser

THREAD_LINK = "https://radio-t.com/p/2023/04/04/prep-853/"
THREAD_PATTERN = r"https?://radio-t.com/p/[^\s\"'<>]+/prep-[0-9]+/"

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))

@pytest.fixture(scope="session")
def openai_api_key(_load_env) -> str | None:
    key = os.getenv("OPENAI_API_KEY")
    if not key or key == "sk-...":
        return None
    return key

def make_comment(user: str, text: str, score: int, minutes: int = 0, pid: str = "", deleted: bool = False) -> Comment:
    """Remark42 comment created `minutes` after a fixed base time."""
    base = datetime(2023, 4, 4, 10, 0, tzinfo=timezone.utc)
    return Comment(
        pid=pid,
        text=text,
        user=CommentUser(name=user, verified=True),
        score=score,
        delete=deleted,
        time=base + timedelta(minutes=minutes),
    )

def comment_json(user: str, text: str, score: int, minutes: int = 0, pid: str = "", deleted: bool = False) -> dict:
    return make_comment(user, text, score, minutes, pid, deleted).model_dump(mode="json", by_alias=True)

@pytest.fixture
def submitter():
    """
    Stand-in for the Telegram submitter. All calls land in submitter.mock_calls in order.
    """
    return MagicMock(spec=["submit", "submit_html", "wait_message_queue", "sleep"])

@pytest.fixture
def http_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    """
    Builds an httpx.Client whose requests are answered by the given handler.
    """
    clients = []

    def _make(handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.close()
