"""Send one rtjc line to a running listener, the way the news site does.

Usage:
    python scripts/send_event.py "⚠ Темы слушателей 852 - https://radio-t.com/p/2023/03/28/prep-852/"
"""
import socket
import sys
from rtjc_relay.config import get_settings

settings = get_settings()

def send_event(line: str, host: str = "localhost", port: int = settings.LISTEN_PORT):
    with socket.create_connection((host, port), timeout=10) as conn:
        conn.sendall(line.rstrip("\n").encode("utf-8") + b"\n")
    print(f"Sent to {host}:{port}: {line}")

if __name__ == "__main__":
    if len(sys.argv) > 1:
        text = " ".join(sys.argv[1:])
    else:
        text = input("Enter line to send (default: ⚠ test https://example.com): ") or "⚠ test https://example.com"
    send_event(text)
