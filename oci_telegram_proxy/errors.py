from typing import Optional


class ProxyError(Exception):
    """Falha do fluxo de requisição: vira resposta texto com ``status_code``."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptyBody(ProxyError):
    status_code = 400
    default_message = "Empty request body"


class UnrepairableJson(ProxyError):
    status_code = 400

    def __init__(self, original_error: str):
        # Mantém a mensagem do PRIMEIRO parse, não a do parse após o reparo
        self.original_error = original_error
        super().__init__(f"Invalid JSON that cannot be fixed: {original_error}")


class MethodRejected(ProxyError):
    status_code = 405
    default_message = "Method not allowed"


class MissingConfirmationUrl(ProxyError):
    status_code = 400
    default_message = "No confirmation URL provided"


class ConfirmationDeliveryFailed(ProxyError):
    status_code = 500
    default_message = "Failed to confirm subscription"


class MessageDeliveryFailed(ProxyError):
    status_code = 500
    default_message = "Failed to send message"


class ConfigurationMissing(ProxyError):
    status_code = 500

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Configuration error: {setting} not configured")


class InternalRenderError(ProxyError):
    """Usado só dentro do renderer; sempre absorvido pelo fallback."""
