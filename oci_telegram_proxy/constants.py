import os

# Configurações globais de ambiente
APP_PORT = int(os.getenv("APP_PORT", "5001"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG_MODE else "INFO").upper()

# Integração com Telegram
TELEGRAM_API_BASE = os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org").rstrip("/")
TELEGRAM_PARSE_MODE = "Markdown"

# Chamadas de saída (confirmação + Telegram). Vazio = sem timeout.
_timeout_env = os.getenv("OUTBOUND_TIMEOUT_SECONDS", "").strip()
OUTBOUND_TIMEOUT_SECONDS = float(_timeout_env) if _timeout_env else None
CONFIRMATION_USER_AGENT = os.getenv("CONFIRMATION_USER_AGENT", "OCI-Telegram-Proxy/1.0")

# Sinais de confirmação de assinatura do OCI Notifications
HEADER_MESSAGE_TYPE = "x-oci-ns-messagetype"
HEADER_CONFIRMATION_URL = "x-oci-ns-confirmationurl"
SUBSCRIPTION_CONFIRMATION_MESSAGE_TYPE = "SUBSCRIPTION_CONFIRMATION"
SUBSCRIPTION_CONFIRMATION_EVENT_TYPE = "com.oraclecloud.ons.subscriptionconfirmation"
BODY_CONFIRMATION_URL_KEYS = ("ConfirmationURL", "confirmationUrl")

# Tipos de transição do alarme
KIND_FIRING_TO_OK = "FIRING_TO_OK"
KIND_OK_TO_FIRING = "OK_TO_FIRING"

# Layout da mensagem
ALERT_TITLE = "Oracle VM Alert"
STATUS_CONFIGS = {
    KIND_FIRING_TO_OK: {"emoji": "✅", "label": "RESOLVED"},
    KIND_OK_TO_FIRING: {"emoji": "🔥", "label": "FIRING"},
    "default": {"emoji": "ℹ️", "label": "UNKNOWN"},
}
FALLBACK_EMOJI = "🚨"
DEFAULT_SEVERITY = "INFO"
DEFAULT_TIMESTAMP = "Unknown time"
CPU_METRIC_MARKER = "Cpu"
CPU_METRIC_LABEL = "CPU Usage"
METRIC_UNIT = "%"
SUMMARY_MAX_CHARS = 200
FALLBACK_RAW_MAX_CHARS = 300
ELLIPSIS = "..."

# Logs
RAW_BODY_LOG_CHARS = 500


def load_telegram_config():
    """Lê credenciais do Telegram no momento da requisição (vazio conta como ausente)."""
    return {
        "bot_token": (os.getenv("TELEGRAM_BOT_TOKEN") or "").strip() or None,
        "chat_id": (os.getenv("TELEGRAM_CHAT_ID") or "").strip() or None,
    }
