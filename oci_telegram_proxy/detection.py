from typing import Any, NamedTuple, Optional, Tuple

from .constants import (
    BODY_CONFIRMATION_URL_KEYS,
    HEADER_CONFIRMATION_URL,
    HEADER_MESSAGE_TYPE,
    SUBSCRIPTION_CONFIRMATION_EVENT_TYPE,
    SUBSCRIPTION_CONFIRMATION_MESSAGE_TYPE,
)
from .utils import get_field, pick_first_nonempty

HEALTH_CHECK = 'health_check'
METHOD_REJECTED = 'method_rejected'
CONFIRMATION_REQUEST = 'confirmation_request'
ALARM_NOTIFICATION = 'alarm_notification'

HEALTH_CHECK_METHODS = ('GET', 'HEAD')
ALARM_DELIVERY_METHOD = 'POST'


class Classification(NamedTuple):
    kind: str
    confirmation_url: Optional[str] = None
    payload: Any = None


def normalize_headers(headers) -> dict:
    # Headers HTTP não diferenciam maiúsculas/minúsculas
    if not headers:
        return {}
    return {str(k).lower(): v for k, v in headers.items()}


def classify_method(method: str) -> Optional[Classification]:
    """Checagem barata pelo método; None = seguir para o corpo."""
    method = (method or '').upper()
    if method in HEALTH_CHECK_METHODS:
        return Classification(HEALTH_CHECK)
    if method != ALARM_DELIVERY_METHOD:
        return Classification(METHOD_REJECTED)
    return None


def confirmation_from_headers(headers) -> Tuple[bool, Optional[str]]:
    """Sinal de confirmação vindo só dos headers: (sinalizado, url)."""
    normalized = normalize_headers(headers)
    url = pick_first_nonempty(normalized.get(HEADER_CONFIRMATION_URL))
    message_type = (normalized.get(HEADER_MESSAGE_TYPE) or '').strip().upper()
    signaled = url is not None or message_type == SUBSCRIPTION_CONFIRMATION_MESSAGE_TYPE
    return signaled, url


def confirmation_from_body(payload: Any) -> Tuple[bool, Optional[str]]:
    url = pick_first_nonempty(*(get_field(payload, key) for key in BODY_CONFIRMATION_URL_KEYS))
    signaled = url is not None or get_field(payload, 'eventType') == SUBSCRIPTION_CONFIRMATION_EVENT_TYPE
    return signaled, url


def classify_payload(payload: Any, headers=None) -> Classification:
    """Classifica o corpo já parseado: confirmação de assinatura ou alarme.

    O OCI sinaliza a confirmação de formas diferentes conforme o caminho de
    entrega (headers, ``eventType`` ou campo de URL no corpo), então todos os
    sinais são aceitos. A URL do header tem precedência sobre a do corpo.
    """
    header_signaled, header_url = confirmation_from_headers(headers)
    body_signaled, body_url = confirmation_from_body(payload)
    if header_signaled or body_signaled:
        return Classification(CONFIRMATION_REQUEST, confirmation_url=header_url or body_url, payload=payload)
    return Classification(ALARM_NOTIFICATION, payload=payload)
