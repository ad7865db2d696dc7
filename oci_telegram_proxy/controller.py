from flask import Flask, request

from .errors import MethodRejected
from .handler import handle_webhook

TEXT_HEADERS = {'Content-Type': 'text/plain; charset=utf-8'}


def create_app():
    app = Flask(__name__)

    # O OCI pode apontar a assinatura para qualquer path do endpoint
    # Sem OPTIONS automático do Flask: só GET e POST são aceitos
    @app.route('/', defaults={'path': ''}, methods=['GET', 'POST'], provide_automatic_options=False)
    @app.route('/<path:path>', methods=['GET', 'POST'], provide_automatic_options=False)
    def webhook(path):
        text, status = handle_webhook(
            request.method,
            request.headers,
            request.get_data(as_text=True),
        )
        return text, status, TEXT_HEADERS

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return MethodRejected().message, 405, TEXT_HEADERS

    return app
