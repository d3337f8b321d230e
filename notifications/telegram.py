# File: notifications/telegram.py

import requests

from common.config import get_settings

# ────────────────────────────────────────────────────────────────────────────────
# Telegram Notification Utility Module
#
# Sends messages via Telegram Bot API. Bot token and chat ID come from the
# TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID settings; when either is missing the
# flows skip notifications entirely.
#
# Reference: https://core.telegram.org/bots/api#sendmessage
# ────────────────────────────────────────────────────────────────────────────────

TELEGRAM_API_BASE = "https://api.telegram.org"


def telegram_configured() -> bool:
    settings = get_settings()
    return bool(settings.TELEGRAM_BOT_TOKEN and settings.TELEGRAM_CHAT_ID)


def send_telegram_message(text: str) -> None:
    """
    Send a text message to the configured Telegram chat.
    Raises RuntimeError if the bot is not configured or the HTTP call fails.
    """
    settings = get_settings()
    if not telegram_configured():
        raise RuntimeError("TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID is not set")

    url = f"{TELEGRAM_API_BASE}/bot{settings.TELEGRAM_BOT_TOKEN}/sendMessage"
    payload = {"chat_id": settings.TELEGRAM_CHAT_ID, "text": text}

    response = requests.get(url, params=payload, timeout=settings.HTTP_TIMEOUT_SECONDS)
    if not response.ok:
        raise RuntimeError(
            f"Failed to send Telegram message: {response.status_code} {response.text}"
        )
