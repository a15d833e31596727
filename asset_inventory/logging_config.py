"""
Logging setup shared by the server and the backup job
"""

import json
import logging
import logging.config
from datetime import datetime, timezone

# LogRecord attributes that are not passed through as extra fields
_RESERVED = frozenset(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Format each record as a single JSON object.

    Base fields are time, level, name and message. Attributes given through
    `extra` on the log call are merged in; values that are not JSON
    serializable are stored as strings.
    """

    def format(self, record):
        payload = {
            'time': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'name': record.name,
            'message': record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED:
                continue
            try:
                json.dumps(value)
                payload.setdefault(key, value)
            except TypeError:
                payload.setdefault(key, str(value))
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level='INFO', json_lines=False):
    """
    Configure the root logger with a single stream handler

    Args:
        level (str): Root logging level name
        json_lines (bool): Use JsonFormatter instead of plain text
    """
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'plain': {'format': '%(asctime)s %(levelname)s %(name)s: %(message)s'},
            'json': {'()': JsonFormatter},
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'json' if json_lines else 'plain',
            },
        },
        'root': {'handlers': ['console'], 'level': level},
    })
