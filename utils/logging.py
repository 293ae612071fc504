"""
Centralized logging configuration for Voicecraft.

This module provides a unified logging system for the entire application,
with structured JSON logs, session-based organization, and contextual logging.
"""

import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional

# Configure base logging directory - make absolute to ensure consistency
PROJECT_ROOT = Path(os.path.dirname(os.path.abspath(__file__))).parent
LOGS_DIR = Path(os.getenv("LOG_DIR", str(PROJECT_ROOT / "logs")))

class JsonFormatter(logging.Formatter):
    """Formatter that outputs JSON strings after formatting the log record."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a record as JSON."""
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        # Add location information for debugging
        if record.levelno <= logging.DEBUG:
            log_entry["location"] = f"{record.pathname}:{record.lineno}"

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Inbound request/response info attached by the request middleware
        if hasattr(record, 'http_request'):
            log_entry["http_request"] = {
                "method": record.http_request.get("method"),
                "path": record.http_request.get("path"),
                "client": record.http_request.get("client"),
            }

        if hasattr(record, 'http_response'):
            log_entry["http_response"] = {
                "status_code": record.http_response.get("status_code"),
                "duration_ms": record.http_response.get("duration_ms"),
            }

        # Add any context data attached to the record
        if hasattr(record, 'context') and record.context:
            log_entry.update(record.context)

        return json.dumps(log_entry, default=str)

class SimpleConsoleFormatter(logging.Formatter):
    """Simplified formatter for console output - doesn't show structured context."""

    def __init__(self, fmt=None, datefmt=None, style='%'):
        super().__init__(fmt, datefmt, style)
        self.default_fmt = '[%(asctime)s] %(levelname)s - %(name)s: %(message)s'

    def format(self, record: logging.LogRecord) -> str:
        """Format a record with simplified output for the console."""
        self._style._fmt = self.default_fmt
        return super().format(record)

class ContextualLogger(logging.LoggerAdapter):
    """Base logger adapter that adds context to log records."""

    def process(self, msg, kwargs):
        """Process the logging message and keyword arguments."""
        # Ensure we have an extra dict with a context key
        kwargs.setdefault('extra', {}).setdefault('context', {})

        if self.extra:
            kwargs['extra']['context'].update(self.extra)

        return msg, kwargs

class RequestLogger(ContextualLogger):
    """Logger adapter for inbound HTTP traffic handled by the API."""

    def log_request(self, method: str, path: str, client: Optional[str] = None):
        """Log an incoming request."""
        self.info(f"HTTP Request: {method} {path}", extra={
            'http_request': {
                'method': method,
                'path': path,
                'client': client,
            }
        })

    def log_response(self, status_code: int, duration_ms: float):
        """Log the response sent for the current request."""
        self.info(f"HTTP Response: status_code={status_code} ({duration_ms:.1f}ms)", extra={
            'http_response': {
                'status_code': status_code,
                'duration_ms': round(duration_ms, 3),
            }
        })

class SessionLogger:
    """
    Manages logging for a session or run of the application.

    A session is a logical unit of execution, such as the API server
    process or a single test run.
    """

    _current_session: Optional[str] = None
    _session_log_file: Optional[str] = None
    _console_handler_configured: bool = False

    @classmethod
    def start_session(cls, session_name: Optional[str] = None) -> str:
        """
        Start a new logging session. Ensures only one file handler is active.
        Logs are saved in logs/YYYYMMDD/session_name_[timestamp].log

        Args:
            session_name: Name for the session, typically the server or test name.
                          Defaults to "pytest" under pytest and "voicecraft" otherwise.

        Returns:
            The session ID (the log file name without .log).
        """
        now = datetime.now()
        timestamp = now.strftime("%Y%m%d_%H%M%S")
        date_str = now.strftime("%Y%m%d")

        if not session_name:
            session_name = "pytest" if 'pytest' in sys.modules else "voicecraft"

        session_id = f"{session_name}_{timestamp}"

        # Create date-based log directory with absolute path
        date_dir = LOGS_DIR / date_str
        date_dir.mkdir(parents=True, exist_ok=True)
        log_file = date_dir / f"{session_id}.log"

        cls._session_log_file = str(log_file)
        cls._current_session = session_id

        cls._configure_root_logger(log_file)

        logging.info(f"Started logging session: {session_id} -> {log_file}",
                     extra={"context": {"session_id": session_id}})

        return session_id

    @classmethod
    def _configure_root_logger(cls, log_file: Path):
        """Configure the root logger handlers for the current session."""
        root_logger = logging.getLogger()
        # Set level every time in case it was changed elsewhere
        root_logger.setLevel(logging.INFO)

        # Remove existing file handlers first
        for handler in root_logger.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                # Close the handler before removing to release the file lock
                handler.close()
                root_logger.removeHandler(handler)

        if cls._console_handler_configured:
            for handler in root_logger.handlers[:]:
                if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                    root_logger.removeHandler(handler)
            cls._console_handler_configured = False

        # Get console log level from environment variable, default to WARNING
        console_level_name = os.environ.get('LOG_LEVEL_CONSOLE', 'WARNING').upper()
        console_level = getattr(logging, console_level_name, logging.WARNING)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(SimpleConsoleFormatter())
        console_handler.setLevel(console_level)
        root_logger.addHandler(console_handler)
        cls._console_handler_configured = True

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JsonFormatter())
        file_handler.setLevel(logging.INFO)
        root_logger.addHandler(file_handler)

    @classmethod
    def get_logger(cls, name: str, context: Dict[str, Any] = None) -> logging.LoggerAdapter:
        """
        Get a logger with session context.

        Args:
            name: Logger name (typically __name__)
            context: Additional context data to include in all log records

        Returns:
            A logger adapter with context
        """
        if not cls._current_session:
            cls.start_session()

        context_data = dict(context or {})
        context_data["session_id"] = cls._current_session

        logger = logging.getLogger(name)
        logger.propagate = True
        return RequestLogger(logger, context_data)

    @classmethod
    def get_session_log_file(cls) -> Optional[str]:
        """Get the path to the current session log file."""
        return cls._session_log_file

    @classmethod
    def get_current_session(cls) -> Optional[str]:
        """Get the current session ID."""
        return cls._current_session

# Convenience function to get a logger with context
def get_logger(name: str, context: Dict[str, Any] = None) -> RequestLogger:
    """
    Get a logger with session context.

    Args:
        name: Logger name (typically __name__)
        context: Additional context data to include in all log records

    Returns:
        A logger adapter that attaches the session ID and context to every record
    """
    return SessionLogger.get_logger(name, context)
