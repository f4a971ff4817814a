"""Exception hierarchy for the relay.

Validation errors are raised before any network call. Upstream and decode
errors carry the link (or thread) they were raised for.
"""


class RelayError(Exception):
    """Base class for everything the relay raises on purpose."""


class ValidationError(RelayError):
    pass


class NoLinkError(ValidationError):
    def __init__(self, message: str):
        super().__init__(f"no link in message: {message!r}")
        self.message = message


class LinkFormatError(ValidationError):
    def __init__(self, link: str):
        super().__init__(f"thread link doesn't fit to format: {link}")
        self.link = link


class UpstreamError(RelayError):
    """A remote service failed or answered with a non-2xx status."""

    def __init__(self, link: str, reason: str):
        super().__init__(f"{reason} for {link}")
        self.link = link
        self.reason = reason


class RemarkError(UpstreamError):
    pass


class ExtractionError(UpstreamError):
    pass


class SummaryError(UpstreamError):
    pass


class DecodeError(RelayError):
    def __init__(self, link: str, reason: str):
        super().__init__(f"can't decode response for {link}: {reason}")
        self.link = link


class DeliveryError(RelayError):
    pass
