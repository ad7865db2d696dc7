import logging

from .detection import (
    CONFIRMATION_REQUEST,
    HEALTH_CHECK,
    classify_method,
    classify_payload,
    confirmation_from_headers,
)
from .errors import EmptyBody, MethodRejected, MissingConfirmationUrl, ProxyError
from .formatters import format_alarm_message
from .parsing import parse_alarm_body
from .services import confirm_subscription, send_telegram_message

logger = logging.getLogger(__name__)

READY_TEXT = 'Oracle Cloud Infrastructure Webhook Endpoint - Ready'
SUBSCRIPTION_CONFIRMED_TEXT = 'Subscription confirmed successfully'
MESSAGE_SENT_TEXT = 'Message sent successfully'
INTERNAL_ERROR_TEXT = 'Internal server error'


def _complete_handshake(url, http):
    if not url:
        logger.error("No confirmationUrl provided in subscription confirmation request")
        raise MissingConfirmationUrl()
    confirm_subscription(url, http=http)
    return SUBSCRIPTION_CONFIRMED_TEXT, 200


def process_webhook(method, headers, body, config=None, http=None):
    """Pipeline de uma requisição. Levanta ``ProxyError`` nas falhas esperadas.

    Ordem: método -> corpo vazio -> URL de confirmação no header (sem parse)
    -> parse tolerante -> sinais de confirmação no corpo -> render -> Telegram.
    """
    early = classify_method(method)
    if early is not None:
        if early.kind == HEALTH_CHECK:
            return READY_TEXT, 200
        raise MethodRejected()

    if isinstance(body, (bytes, bytearray)):
        body = body.decode('utf-8', errors='replace')
    if not body or not body.strip():
        raise EmptyBody()

    _, header_url = confirmation_from_headers(headers)
    if header_url:
        logger.info("Received Oracle Cloud subscription confirmation request (headers)")
        return _complete_handshake(header_url, http)

    payload = parse_alarm_body(body)
    classification = classify_payload(payload, headers)
    if classification.kind == CONFIRMATION_REQUEST:
        logger.info("Received Oracle Cloud subscription confirmation request")
        return _complete_handshake(classification.confirmation_url, http)

    message = format_alarm_message(classification.payload)
    send_telegram_message(message, config=config, http=http)
    return MESSAGE_SENT_TEXT, 200


def handle_webhook(method, headers, body, config=None, http=None):
    """Retorna sempre ``(texto, status)``; nenhuma falha derruba o processo."""
    try:
        return process_webhook(method, headers, body, config=config, http=http)
    except ProxyError as exc:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log("Request failed (%s): %s", exc.status_code, exc.message)
        return exc.message, exc.status_code
    except Exception:
        logger.exception("Unhandled error while processing webhook")
        return INTERNAL_ERROR_TEXT, 500
