"""
Listener for the legacy rtjc feed.
Each TCP connection carries exactly one newline-terminated line, which is
relayed to the chat and, for summary-marked lines, enriched with AI summaries.
"""
import socketserver
from ..errors import RelayError
from ..log import get_logger
from ..pipeline.dispatch import RateLimitedDispatcher, Submitter
from ..pipeline.router import EnrichmentRouter
from .pins import PinClassifier

logger = get_logger("rtjc_listener")

class _LineHandler(socketserver.StreamRequestHandler):
    def handle(self):
        raw = self.rfile.readline()
        if not raw.endswith(b"\n"):
            logger.warning(f"can't read message, got {len(raw)} bytes without newline")
            return
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"can't read message, {e}")
            return
        self.server.relay.handle_line(line)

class _Server(socketserver.TCPServer):
    allow_reuse_address = True

    def __init__(self, address, relay: "RtjcListener"):
        self.relay = relay
        super().__init__(address, _LineHandler)

    def handle_error(self, request, client_address):
        logger.exception(f"error handling connection from {client_address}")

class RtjcListener:
    def __init__(
        self,
        port: int,
        submitter: Submitter,
        pins: PinClassifier,
        router: EnrichmentRouter,
        dispatcher: RateLimitedDispatcher,
    ):
        self.port = port
        self.submitter = submitter
        self.pins = pins
        self.router = router
        self.dispatcher = dispatcher

    def handle_line(self, line: str):
        """Relay the line as is (pinned if it is an announcement), then send its summaries."""
        pin, msg = self.pins.classify(line)
        try:
            self.submitter.submit(msg, pin=pin)
        except Exception as e:
            logger.warning(f"can't send message, {e}")
        self.send_summary(msg)

    def send_summary(self, msg: str):
        try:
            messages = self.router.route(msg)
        except RelayError as e:
            logger.warning(f"can't get summary, {e}")
            return
        sent = self.dispatcher.dispatch(messages, source=msg)
        if sent:
            logger.info(f"{sent} summary messages sent for {msg.strip()!r}")

    def server(self) -> socketserver.TCPServer:
        """Bound (not yet serving) TCP server; raises OSError if the port is taken."""
        return _Server(("", self.port), self)

    def listen(self):
        """Accept and process connections one by one, forever."""
        logger.info(f"rtjc listener on port {self.port}")
        with self.server() as srv:
            srv.serve_forever()
