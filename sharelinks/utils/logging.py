"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the lambda handler's `__init__.py` file
before any other logging is done.

Every record is a single JSON line on stdout. Fields passed through `extra`
are copied to the top level, and a traceback (if any) lands in `exception`:
{
    "timestamp": "2026-10-19T12:00:00.000Z",
    "level": "INFO",
    "logger": "sharelinks.services.share_link_service",
    "message": "Created share link.",
    "token": "aZ3kQ9",
    "attempt": 1,
    "event": "SHARE_CREATED"
}

Share link events (`event` field), filterable in CloudWatch Logs Insights:
    SHARE_CREATED           a token was committed (create_share, service)
    SHARE_RESOLVED          a token resolved to its target (get_share)
    SHARE_NOT_FOUND         unknown or expired token (get_share)
    TOKEN_SPACE_EXHAUSTED   every draw collided, token length too small (create_share, service)
    STORE_UNAVAILABLE       Redis unreachable or refusing commands, answered with 503
    CONFIGURATION_ERROR     AppConfig could not be loaded or is invalid
    INVALID_JSON_BODY, MISSING_URL, MISSING_TOKEN
                            rejected requests (400)
    UNKNOWN_INTERNAL_SERVER_ERROR
                            unexpected exception caught by guarantee_500_response
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from sharelinks.constants import ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {'asctime', 'message', 'taskName'}

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
