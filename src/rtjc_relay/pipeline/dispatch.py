"""Rate-limited delivery of a batch of rendered messages.

Telegram throttles bots that post bursts into one chat, so after every
BATCH_SIZE messages the dispatcher waits for the submitter's queue to drain
and then cools down before sending more.
"""

import time
from typing import Callable, Iterable, Protocol
from ..log import get_logger

logger = get_logger("dispatch")

BATCH_SIZE = 15
COOLDOWN_SECONDS = 60.0

class Submitter(Protocol):
    def submit(self, text: str, pin: bool = False):
        ...

    def submit_html(self, text: str, pin: bool = False):
        ...

    def wait_message_queue(self):
        ...

class RateLimitedDispatcher:
    def __init__(
        self,
        submitter: Submitter,
        batch_size: int = BATCH_SIZE,
        cooldown: float = COOLDOWN_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.submitter = submitter
        self.batch_size = batch_size
        self.cooldown = cooldown
        self.sleep = sleep

    def dispatch(self, messages: Iterable[str], source: str = "") -> int:
        """
        Sends messages in order as HTML, returns how many were forwarded.
        An empty message aborts the rest of the batch.
        """
        sent = 0
        try:
            for i, msg in enumerate(messages):
                if msg == "":
                    logger.warning(f"empty summary item #{i} for {source!r}, dropping the rest")
                    return sent
                try:
                    self.submitter.submit_html(msg, pin=False)
                except Exception as e:
                    logger.warning(f"can't send summary, {e}")
                    continue

                sent += 1
                if sent % self.batch_size == 0:
                    logger.info(f"{sent} messages sent, waiting for queue and pausing {self.cooldown:.0f}s")
                    self.submitter.wait_message_queue()
                    self.sleep(self.cooldown)
        finally:
            close = getattr(messages, "close", None)
            if close is not None:
                close()
        return sent
