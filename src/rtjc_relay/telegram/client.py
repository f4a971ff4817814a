"""Telegram delivery with an internal outbound queue.

submit()/submit_html() only enqueue; a sender thread posts messages in
order through the Bot API. wait_message_queue() blocks until everything
queued so far has been handled.
"""

import queue
import threading
from dataclasses import dataclass
import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
from ..errors import DeliveryError
from ..log import get_logger

logger = get_logger("telegram_client")

class TelegramRateLimited(DeliveryError):
    pass

@dataclass
class Outgoing:
    text: str
    html: bool = False
    pin: bool = False

_STOP = object()

class TelegramSubmitter:
    def __init__(self, http: httpx.Client, token: str, chat_id: str, api_url: str = "https://api.telegram.org"):
        self.http = http
        self.base_url = f"{api_url.rstrip('/')}/bot{token}"
        self.chat_id = chat_id
        self.queue: queue.Queue = queue.Queue()
        self._sender = threading.Thread(target=self._run, name="telegram-sender", daemon=True)
        self._sender.start()

    def submit(self, text: str, pin: bool = False):
        self._enqueue(Outgoing(text=text, html=False, pin=pin))

    def submit_html(self, text: str, pin: bool = False):
        self._enqueue(Outgoing(text=text, html=True, pin=pin))

    def wait_message_queue(self):
        self.queue.join()

    def close(self):
        """Send what is queued, then stop the sender thread."""
        self.queue.put(_STOP)
        self._sender.join()

    def _enqueue(self, item: Outgoing):
        if not item.text.strip():
            logger.debug("Skipping empty message")
            return
        self.queue.put(item)

    def _run(self):
        while True:
            item = self.queue.get()
            try:
                if item is _STOP:
                    return
                self.deliver(item)
            except Exception as e:
                logger.error(f"can't send message to telegram: {e}")
            finally:
                self.queue.task_done()

    def deliver(self, item: Outgoing):
        message_id = self.send_message(item.text, html=item.html)
        if item.pin:
            self.pin_message(message_id)

    @retry(
        retry=retry_if_exception_type(TelegramRateLimited),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10)
    )
    def send_message(self, text: str, html: bool = False) -> int:
        payload = {
            "chat_id": self.chat_id,
            "text": text,
            "disable_web_page_preview": True,
        }
        if html:
            payload["parse_mode"] = "HTML"
        result = self._call("sendMessage", payload)
        return result["message_id"]

    def pin_message(self, message_id: int):
        self._call("pinChatMessage", {"chat_id": self.chat_id, "message_id": message_id})

    def _call(self, method: str, payload: dict) -> dict:
        try:
            resp = self.http.post(f"{self.base_url}/{method}", json=payload)
        except httpx.HTTPError as e:
            raise DeliveryError(f"{method} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = {}

        if resp.status_code == 429:
            logger.warning("Telegram rate limited, retrying...")
            raise TelegramRateLimited(f"{method} rate limited: {body.get('description', '')}")
        if not resp.is_success or not body.get("ok"):
            raise DeliveryError(f"{method} failed: {resp.status_code} {body.get('description', '')}")
        return body.get("result") or {}
