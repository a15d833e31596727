"""
Start the API server

Usage:
    python -m asset_inventory
"""

import logging

from .app import create_app
from .config import load_settings
from .logging_config import configure_logging

logger = logging.getLogger('asset_inventory')


def main():
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_json)
    app = create_app(settings=settings)
    logger.info('Asset inventory listening on http://%s:%d', settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)


if __name__ == '__main__':
    main()
