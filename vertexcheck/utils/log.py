import json
import logging
import datetime
import re

from vertexcheck.config.settings import settings


def sanitize(text) -> str:
    """strip memory addresses like <HTTPSConnection(...) at 0x...> from error text"""
    return re.sub(r'0x[0-9a-fA-F]+', '<ptr>', str(text))


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, event name and the event fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            **getattr(record, 'fields', {}),
        }
        # non-serializable values (exceptions, urls) end up as sanitized text
        return json.dumps(entry, default=sanitize, ensure_ascii=False)


class StructuredLogger:
    """Event logger: `app_logger.info("vertex.connect.start", project=...)`."""

    def __init__(self, logger_name='StructuredLogger', level=None):
        self.logger = logging.getLogger(logger_name)
        self.logger.setLevel(level or settings.VERTEX_LOG_LEVEL)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JsonLineFormatter())
            self.logger.addHandler(handler)

    def _log(self, level: int, event: str, **fields):
        self.logger.log(level, event, extra={'fields': fields})

    def info(self, event, **fields):
        self._log(logging.INFO, event, **fields)

    def warning(self, event, **fields):
        self._log(logging.WARNING, event, **fields)

    def error(self, event, **fields):
        self._log(logging.ERROR, event, **fields)

    def debug(self, event, **fields):
        self._log(logging.DEBUG, event, **fields)

app_logger = StructuredLogger('vertexcheck')
