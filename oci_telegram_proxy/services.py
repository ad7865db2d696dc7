import json
import logging

import requests

from .constants import (
    CONFIRMATION_USER_AGENT,
    OUTBOUND_TIMEOUT_SECONDS,
    TELEGRAM_API_BASE,
    TELEGRAM_PARSE_MODE,
    load_telegram_config,
)
from .errors import ConfigurationMissing, ConfirmationDeliveryFailed, MessageDeliveryFailed

logger = logging.getLogger(__name__)


def _is_success(resp):
    return 200 <= resp.status_code < 300


def confirm_subscription(url, http=None):
    """Faz o GET único na URL de confirmação do OCI Notifications."""
    http = http or requests
    logger.info("Confirming subscription at: %s", url)
    try:
        resp = http.get(
            url,
            headers={'User-Agent': CONFIRMATION_USER_AGENT, 'Accept': '*/*'},
            timeout=OUTBOUND_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        logger.error("Error confirming subscription: %s", exc)
        raise ConfirmationDeliveryFailed("Error confirming subscription") from exc

    if not _is_success(resp):
        logger.error("Failed to confirm subscription: %s %s", resp.status_code, resp.text[:500])
        raise ConfirmationDeliveryFailed()

    logger.info("Successfully confirmed Oracle Cloud subscription")
    return resp


def send_telegram_message(text, config=None, http=None):
    """Envia ``text`` para o chat configurado via Bot API do Telegram.

    Token ou chat id ausentes levantam ``ConfigurationMissing`` antes de
    qualquer chamada de rede.
    """
    http = http or requests
    config = config if config is not None else load_telegram_config()
    bot_token = config.get('bot_token')
    chat_id = config.get('chat_id')
    if not bot_token:
        logger.error("TELEGRAM_BOT_TOKEN environment variable is not set")
        raise ConfigurationMissing('TELEGRAM_BOT_TOKEN')
    if not chat_id:
        logger.error("TELEGRAM_CHAT_ID environment variable is not set")
        raise ConfigurationMissing('TELEGRAM_CHAT_ID')

    url = f"{TELEGRAM_API_BASE}/bot{bot_token}/sendMessage"
    payload = {
        'chat_id': chat_id,
        'text': text,
        'parse_mode': TELEGRAM_PARSE_MODE,
        'disable_web_page_preview': True,
    }
    # Nunca loga o token nem o chat id
    logger.debug("Sending to Telegram URL: %s", url.replace(bot_token, '[HIDDEN]'))
    logger.debug("Telegram payload: %s", json.dumps({**payload, 'chat_id': '[HIDDEN]'}, ensure_ascii=False, indent=2))

    try:
        resp = http.post(url, json=payload, timeout=OUTBOUND_TIMEOUT_SECONDS)
    except requests.RequestException as exc:
        logger.error("Telegram request failed: %s", str(exc).replace(bot_token, '[HIDDEN]'))
        raise MessageDeliveryFailed() from exc

    if not _is_success(resp):
        logger.error("Telegram API error: %s %s", resp.status_code, resp.text[:500])
        raise MessageDeliveryFailed()

    logger.info("Telegram message sent, status: %s", resp.status_code)
    return resp
