import json
import logging

from .constants import (
    ALERT_TITLE,
    CPU_METRIC_LABEL,
    CPU_METRIC_MARKER,
    DEFAULT_SEVERITY,
    DEFAULT_TIMESTAMP,
    ELLIPSIS,
    FALLBACK_EMOJI,
    FALLBACK_RAW_MAX_CHARS,
    METRIC_UNIT,
    STATUS_CONFIGS,
    SUMMARY_MAX_CHARS,
)
from .errors import InternalRenderError
from .models import AlarmRecord
from .utils import format_metric_value, parse_metric_number, truncate_text

logger = logging.getLogger(__name__)


def resolve_status(kind):
    """Retorna (emoji, texto do status) para o tipo de transição do alarme."""
    config = STATUS_CONFIGS.get(kind)
    if config:
        return config['emoji'], config['label']
    default = STATUS_CONFIGS['default']
    return default['emoji'], kind or default['label']


def metric_display_name(key):
    return CPU_METRIC_LABEL if CPU_METRIC_MARKER in key else key


def format_metric_lines(metrics):
    lines = []
    for key, raw_value in (metrics or {}).items():
        value = parse_metric_number(raw_value)
        if value is None:
            # Métricas não numéricas são esperadas no payload do OCI
            logger.debug("Ignoring non-numeric metric value: %s=%r", key, raw_value)
            continue
        lines.append(f"*{metric_display_name(str(key))}:* {format_metric_value(value, METRIC_UNIT)}")
    return lines


def build_alarm_message(record):
    emoji, status_text = resolve_status(record.kind)

    parts = [f"{emoji} *{ALERT_TITLE}*", ""]
    parts.append(f"*Status:* {status_text}")
    parts.append(f"*Severity:* {record.severity or DEFAULT_SEVERITY}")
    parts.append(f"*Time:* {record.timestamp or DEFAULT_TIMESTAMP}")
    if record.title:
        parts.append(f"*Alert:* {record.title}")

    meta = record.first_meta
    if meta is not None:
        dimension = meta.first_dimension
        if dimension is not None:
            if dimension.resource_name:
                parts.append(f"*Resource:* {dimension.resource_name}")
            if dimension.instance_shape:
                parts.append(f"*Instance Type:* {dimension.instance_shape}")
            if dimension.region:
                parts.append(f"*Region:* {dimension.region}")

        parts.extend(format_metric_lines(meta.first_metrics))

        if meta.summary:
            parts.append(f"*Details:* {truncate_text(meta.summary, SUMMARY_MAX_CHARS, ELLIPSIS)}")
        if meta.console_url:
            parts.append(f"[View in Console]({meta.console_url})")

    return "\n".join(parts) + "\n"


def _raw_excerpt(payload):
    try:
        raw = json.dumps(payload, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return None
    return raw[:FALLBACK_RAW_MAX_CHARS]


def format_fallback_message(payload, error):
    message = (
        f"{FALLBACK_EMOJI} *{ALERT_TITLE}*\n\n"
        f"Received alarm but failed to parse details.\n"
        f"Error: {error.message}"
    )
    raw = _raw_excerpt(payload)
    if raw is not None:
        message += f"\nRaw: {raw}{ELLIPSIS}"
    return message


def format_alarm_message(payload):
    """Renderiza o alarme em Markdown do Telegram. Nunca levanta exceção.

    Aceita o valor JSON cru (qualquer tipo) ou um ``AlarmRecord`` já extraído.
    Qualquer falha interna vira a mensagem de fallback com o erro e um trecho
    do JSON recebido.
    """
    try:
        record = payload if isinstance(payload, AlarmRecord) else AlarmRecord.from_payload(payload)
        return build_alarm_message(record)
    except Exception as exc:
        logger.exception("Error formatting message")
        return format_fallback_message(payload, InternalRenderError(str(exc) or exc.__class__.__name__))
