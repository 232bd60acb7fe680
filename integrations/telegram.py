"""
Telegram bot integration for new inquiry notifications.

Sends a short summary of each contact-form submission to the sales chat.
"""

from typing import Optional
import requests
import structlog

from config import settings
from exceptions import TelegramError
from models.inquiry import InquiryResponse

logger = structlog.get_logger(__name__)

# Telegram Markdown (legacy) special characters
_MARKDOWN_SPECIAL = ("_", "*", "`", "[")


def get_telegram_config() -> tuple[Optional[str], Optional[str]]:
    """
    Get Telegram configuration from settings.

    Returns:
        tuple: (bot_token, chat_id)
    """
    if not settings.telegram_configured:
        logger.debug(
            "telegram_not_configured",
            has_token=bool(settings.telegram_bot_token),
            has_chat_id=bool(settings.telegram_chat_id)
        )

    return settings.telegram_bot_token, settings.telegram_chat_id


def _escape(text: Optional[str]) -> str:
    text = text or ""
    for ch in _MARKDOWN_SPECIAL:
        text = text.replace(ch, f"\\{ch}")
    return text


def format_inquiry_message(inquiry: InquiryResponse, preview_chars: int = 300) -> str:
    """
    Format inquiry as Telegram message.

    Args:
        inquiry: Newly created inquiry
        preview_chars: Message body is cut to this length

    Returns:
        Formatted message string
    """
    body = inquiry.message
    if len(body) > preview_chars:
        body = body[:preview_chars].rstrip() + "…"

    lines = [
        "📩 *New inquiry*",
        "",
        f"From: {_escape(inquiry.name)} <{_escape(inquiry.email)}>",
    ]

    if inquiry.company:
        lines.append(f"Company: {_escape(inquiry.company)}")
    if inquiry.phone:
        lines.append(f"Phone: {_escape(inquiry.phone)}")
    if inquiry.product_interest:
        lines.append(f"Interest: {_escape(inquiry.product_interest)}")

    lines.append("")
    lines.append(_escape(body))

    return "\n".join(lines)


def send_message(message: str, parse_mode: str = "Markdown") -> bool:
    """
    Send message to Telegram.

    Args:
        message: Message text to send
        parse_mode: Telegram parse mode (Markdown or HTML)

    Returns:
        True if sent, False if Telegram is not configured

    Raises:
        TelegramError: If send fails
    """
    bot_token, chat_id = get_telegram_config()

    if not bot_token or not chat_id:
        logger.debug("telegram_not_configured_skipping_send")
        return False

    url = f"https://api.telegram.org/bot{bot_token}/sendMessage"

    payload = {
        "chat_id": chat_id,
        "text": message,
        "parse_mode": parse_mode,
        "disable_web_page_preview": True,
    }

    try:
        logger.info("sending_telegram_message", chat_id=chat_id)

        response = requests.post(url, json=payload, timeout=10)
        response.raise_for_status()

        result = response.json()

        if not result.get("ok"):
            error_msg = result.get("description", "Unknown error")
            logger.error("telegram_api_error", error=error_msg)
            raise TelegramError(f"Telegram API error: {error_msg}")

        logger.info("telegram_message_sent", message_id=result.get("result", {}).get("message_id"))
        return True

    except requests.exceptions.RequestException as e:
        logger.error("telegram_request_failed", error=str(e))
        raise TelegramError(f"Failed to send Telegram message: {str(e)}")


def notify_new_inquiry(inquiry: InquiryResponse) -> bool:
    """
    Send new-inquiry notification.

    Returns:
        True if sent successfully

    Raises:
        TelegramError: If send fails
    """
    return send_message(format_inquiry_message(inquiry))
