import logging

from oci_telegram_proxy.controller import create_app
from oci_telegram_proxy.constants import APP_PORT, DEBUG_MODE, LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=APP_PORT, debug=DEBUG_MODE)
