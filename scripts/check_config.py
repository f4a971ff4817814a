#!/usr/bin/env python3
"""
Quick check that the relay is configured.
Run this before starting the listener to see which settings are missing.
"""
from rtjc_relay.config import get_settings, load_pinned
from rtjc_relay.main_listener import REQUIRED, missing_settings

def check_env():
    settings = get_settings()
    missing = missing_settings(settings)

    print("=" * 60)
    print("rtjc relay configuration check")
    print("=" * 60)

    for name in REQUIRED:
        value = getattr(settings, name)
        if value:
            # Mask the token for security
            if "TOKEN" in name or "KEY" in name:
                masked = value[:8] + "..." if len(value) > 8 else "***"
                print(f"✓ {name}: {masked}")
            else:
                print(f"✓ {name}: {value}")
        else:
            print(f"✗ {name}: NOT SET")

    print(f"  LISTEN_PORT: {settings.LISTEN_PORT}")
    print(f"  EXTRACTOR_BACKEND: {settings.EXTRACTOR_BACKEND}")
    if settings.EXTRACTOR_BACKEND == "remote" and not settings.UR_TOKEN:
        print("✗ UR_TOKEN: NOT SET (required by the remote extractor)")
    print(f"  CACHE_PERSIST: {settings.CACHE_PERSIST} ({settings.CACHE_PATH})")
    print(f"  Pinned triggers: {len(load_pinned(settings.PINNED_PATH))}")
    print("=" * 60)

    if not missing:
        print("\n✓ All required settings are present!")
        print("\nRun the listener:")
        print("   rtjc-relay")
        print("\nThen send a test line:")
        print("   python scripts/send_event.py")
    else:
        print("\n✗ Some settings are missing. Add them to your .env file:")
        print("TELEGRAM_TOKEN=123456:your-bot-token")
        print("TELEGRAM_CHAT_ID=@your_channel")
        print("OPENAI_API_KEY=sk-your-key")
        print("UR_TOKEN=your-extractor-token")
    print()

if __name__ == "__main__":
    check_env()
