import pytest
from unittest.mock import MagicMock, patch
import httpx
from rtjc_relay.errors import DecodeError, ExtractionError, LinkFormatError, RemarkError
from rtjc_relay.retrieval.extract import LocalExtractor, RemoteExtractor, build_extractor
from rtjc_relay.retrieval.remark import RemarkClient, rank_comments
from rtjc_relay.config import Settings
from conftest import THREAD_LINK, THREAD_PATTERN, comment_json, make_comment

REMARK_API = "https://remark.test/api/v1/find"

def _remark(http, exclude_negative=True):
    return RemarkClient(
        http, api_url=REMARK_API, site="radiot",
        thread_pattern=THREAD_PATTERN, exclude_negative=exclude_negative,
    )

# --- ranking ---

def test_rank_orders_by_score_then_time():
    """
    WHY: The best listener themes go first; among equals, the earliest suggestion wins.
    HOW: Rank comments with mixed scores and two equal scores at different times.
    EXPECTED: Descending score; the earlier of the tied comments comes first.
    """
    comments = [
        make_comment("late", "x", 3, minutes=10),
        make_comment("low", "x", 1, minutes=0),
        make_comment("top", "x", 7, minutes=5),
        make_comment("early", "x", 3, minutes=1),
    ]
    assert [c.user.name for c in rank_comments(comments)] == ["top", "early", "late", "low"]

def test_rank_is_independent_of_input_order():
    a = make_comment("a", "x", 2)
    b = make_comment("b", "x", 1)
    assert rank_comments([b, a]) == rank_comments([a, b]) == [a, b]

def test_rank_filters_replies_and_deleted():
    """
    WHY: Only top-level, live comments are themes.
    HOW: Include a high-score reply and a high-score deleted comment.
    EXPECTED: Both dropped regardless of score.
    """
    comments = [
        make_comment("reply", "x", 100, pid="parent-1"),
        make_comment("deleted", "x", 50, deleted=True),
        make_comment("ok", "x", 1),
    ]
    assert [c.user.name for c in rank_comments(comments)] == ["ok"]

def test_rank_negative_scores_switch():
    comments = [make_comment("neg", "x", -1), make_comment("zero", "x", 0)]
    assert [c.user.name for c in rank_comments(comments, exclude_negative=True)] == ["zero"]
    assert [c.user.name for c in rank_comments(comments, exclude_negative=False)] == ["zero", "neg"]

# --- Remark42 client ---

def test_get_top_comments_request_and_ranking(http_client):
    """
    WHY: Verify the Remark42 query and that decoding + ranking work on a real-looking payload.
    HOW: MockTransport answers with three comments and records the request.
    EXPECTED: site/url query params sent; comments ranked best first.
    """
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"comments": [
            comment_json("B", "b", 1),
            comment_json("A", "a", 5),
            comment_json("R", "r", 9, pid="x"),
        ]})

    top = _remark(http_client(handler)).get_top_comments(THREAD_LINK)

    assert [c.user.name for c in top] == ["A", "B"]
    assert seen[0].url.params["site"] == "radiot"
    assert seen[0].url.params["url"] == THREAD_LINK
    assert seen[0].url.params["format"] == "plain"

def test_get_top_comments_rejects_bad_link(http_client):
    handler = MagicMock()
    with pytest.raises(LinkFormatError):
        _remark(http_client(handler)).get_top_comments("https://radio-t.com/about/")
    handler.assert_not_called()

def test_get_top_comments_non_2xx(http_client):
    client = http_client(lambda request: httpx.Response(502))
    with pytest.raises(RemarkError) as exc:
        _remark(client).get_top_comments(THREAD_LINK)
    assert exc.value.link == THREAD_LINK
    assert "502" in str(exc.value)

def test_get_top_comments_transport_error(http_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemarkError):
        _remark(http_client(handler)).get_top_comments(THREAD_LINK)

def test_get_top_comments_bad_json(http_client):
    client = http_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    with pytest.raises(DecodeError):
        _remark(client).get_top_comments(THREAD_LINK)

# --- extractors ---

def test_remote_extractor_reads_configured_fields(http_client):
    """
    WHY: The extraction service has used both Title/Content and title/content over time.
    HOW: Configure capitalized field names and answer with such a payload.
    EXPECTED: Article built from those fields; token and url passed as query params.
    """
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"Title": "T", "Content": "Body", "title": "wrong"})

    extractor = RemoteExtractor(
        http_client(handler), "https://ur.test/extract", "tkn",
        title_field="Title", content_field="Content",
    )
    article = extractor.extract("https://example.com/a")

    assert (article.title, article.content) == ("T", "Body")
    assert seen[0].url.params["token"] == "tkn"
    assert seen[0].url.params["url"] == "https://example.com/a"

def test_remote_extractor_missing_fields_are_empty(http_client):
    extractor = RemoteExtractor(http_client(lambda r: httpx.Response(200, json={})), "https://ur.test", "t")
    article = extractor.extract("https://example.com/a")
    assert article.title == "" and article.content == ""

def test_remote_extractor_errors(http_client):
    failing = RemoteExtractor(http_client(lambda r: httpx.Response(401)), "https://ur.test", "t")
    with pytest.raises(ExtractionError):
        failing.extract("https://example.com/a")

    garbage = RemoteExtractor(http_client(lambda r: httpx.Response(200, content=b"nope")), "https://ur.test", "t")
    with pytest.raises(DecodeError):
        garbage.extract("https://example.com/a")

    wrong_shape = RemoteExtractor(http_client(lambda r: httpx.Response(200, json=["x"])), "https://ur.test", "t")
    with pytest.raises(DecodeError):
        wrong_shape.extract("https://example.com/a")

def test_local_extractor_uses_trafilatura(http_client):
    """
    WHY: Without an extraction service we download the page and extract it ourselves.
    HOW: MockTransport serves HTML; trafilatura is mocked to keep the test deterministic.
    EXPECTED: Article has the metadata title and extracted text.
    """
    client = http_client(lambda r: httpx.Response(200, text="<html><title>T</title><p>Body</p></html>"))
    with patch("rtjc_relay.retrieval.extract.trafilatura") as traf:
        traf.extract.return_value = "Body text"
        traf.extract_metadata.return_value = MagicMock(title="Page title")
        article = LocalExtractor(client).extract("https://example.com/a")

    assert (article.title, article.content) == ("Page title", "Body text")
    traf.extract.assert_called_once()

def test_local_extractor_http_error(http_client):
    client = http_client(lambda r: httpx.Response(404))
    with pytest.raises(ExtractionError):
        LocalExtractor(client).extract("https://example.com/missing")

def test_build_extractor_by_backend(http_client):
    client = http_client(lambda r: httpx.Response(200))
    assert isinstance(build_extractor(Settings(EXTRACTOR_BACKEND="local"), client), LocalExtractor)
    remote = build_extractor(Settings(EXTRACTOR_BACKEND="remote", EXTRACTOR_TITLE_FIELD="Title"), client)
    assert isinstance(remote, RemoteExtractor)
    assert remote.title_field == "Title"
