import re

# Basic regex for URLs (http/https), stops at whitespace, quotes and angle brackets
URL_REGEX = re.compile(r"https?://[^\s\"'<>]+")

def first_link(text: str) -> str:
    """
    Returns the first URL found in text, or "" if there is none.
    Works on plain lines and on HTML comment bodies (href values stop at the quote).
    """
    match = URL_REGEX.search(text or "")
    return match.group(0) if match else ""

def is_thread_host(link: str, domain: str) -> bool:
    """True if the link points to the comment-hosting site."""
    return bool(link) and domain in link
