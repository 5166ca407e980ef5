"""Structured JSON Logging with Correlation ID Support"""
import json
import logging
import os
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from ..config.settings import settings


# Context variable for correlation ID
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

# Record attributes copied into the JSON payload when present
EXTRA_FIELDS = [
    # complaint lifecycle
    "complaint_id", "comment_id", "entry_id", "user_id", "status",
    "previous_status", "is_admin", "error_code",
    # profile enrichment
    "rows", "resolved",
    # request log
    "method", "path", "status_code", "duration_ms",
]

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with the request's correlation ID"""
    
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        
        correlation_id = correlation_id_var.get()
        if correlation_id:
            payload["correlation_id"] = correlation_id
        
        payload.update(
            (field, getattr(record, field)) for field in EXTRA_FIELDS if hasattr(record, field)
        )
        
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        
        return json.dumps(payload, default=str)


def _rotating_handler(filename: str, level: int = logging.NOTSET) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        os.path.join(settings.logs_path, filename),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def setup_logging() -> None:
    """
    Route all logging through the JSON formatter.
    
    Writes to stdout, app.log, and error.log (ERROR and above). Safe to call
    more than once; existing root handlers are replaced.
    """
    os.makedirs(settings.logs_path, exist_ok=True)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level.upper())
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    
    formatter = JsonFormatter()
    handlers = [
        logging.StreamHandler(sys.stdout),
        _rotating_handler("app.log"),
        _rotating_handler("error.log", logging.ERROR),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    
    # Request logging comes from the correlation middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name"""
    return logging.getLogger(name)


def set_correlation_id(correlation_id: str) -> Token:
    """Bind correlation_id to the current context; returns a reset token"""
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token: Token) -> None:
    """Restore the correlation ID that was bound before set_correlation_id"""
    correlation_id_var.reset(token)


def get_correlation_id() -> Optional[str]:
    """Get correlation ID from context"""
    return correlation_id_var.get()
