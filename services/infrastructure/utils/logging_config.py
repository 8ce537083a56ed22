"""
Logging configuration for the canvas service.

Handles:
- Custom file handlers with timestamped rotation
- Unified formatter with ANSI colors
- Logger configuration and filters
- httpx request log reformatting
"""

import os
import sys
import logging
import re
from logging.handlers import BaseRotatingHandler
from datetime import datetime, timedelta
from typing import Literal
from urllib.parse import urlparse
from config.settings import config


_CLOSED_STREAM_PHRASES = (
    "closed file", "i/o operation", "bad file descriptor",
    "operation on closed", "stream is closed"
)


class TimestampedRotatingFileHandler(BaseRotatingHandler):
    """
    Custom file handler that creates a new timestamped log file every 72 hours.
    Each file is named with the start timestamp of its 72-hour period.
    Example: app.2025-01-15_00-00-00.log
    """

    def __init__(self, base_filename, interval_hours=72, backup_count=10, encoding='utf-8'):
        """
        Initialize the handler.

        Args:
            base_filename: Base log file path (e.g., 'logs/app.log')
            interval_hours: Hours between rotations (default: 72)
            backup_count: Number of backup files to keep (default: 10)
            encoding: File encoding (default: 'utf-8')
        """
        self.base_filename = base_filename
        self.interval_hours = interval_hours
        self.backup_count = backup_count
        self.interval_seconds = interval_hours * 3600

        self.current_period_start = self._get_period_start()
        current_filename = self._get_current_filename()

        log_dir = os.path.dirname(current_filename)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        BaseRotatingHandler.__init__(self, current_filename, 'a', encoding=encoding, delay=False)

        self.next_rotation_time = self.current_period_start + timedelta(hours=interval_hours)

    def _get_period_start(self) -> datetime:
        """Calculate the start timestamp of the current 72-hour period."""
        now = datetime.now()
        seconds_since_epoch = (now - datetime(1970, 1, 1)).total_seconds()
        periods_passed = int(seconds_since_epoch / self.interval_seconds)
        return datetime.fromtimestamp(periods_passed * self.interval_seconds)

    def _get_current_filename(self):
        """Generate filename for the current period."""
        timestamp_str = self.current_period_start.strftime('%Y-%m-%d_%H-%M-%S')
        base_dir = os.path.dirname(self.base_filename) or '.'
        base_name = os.path.basename(self.base_filename)
        if base_name.endswith('.log'):
            base_name = base_name[:-4]
        return os.path.join(base_dir, f"{base_name}.{timestamp_str}.log")

    def shouldRollover(self, record):  # pylint: disable=invalid-name
        """Time-based rotation; the record itself is not inspected."""
        del record
        return datetime.now() >= self.next_rotation_time

    def doRollover(self):  # pylint: disable=invalid-name
        """Perform rollover to a new timestamped file."""
        if self.stream:
            self.stream.close()

        self._cleanup_old_files()

        self.current_period_start = self._get_period_start()
        self.next_rotation_time = self.current_period_start + timedelta(hours=self.interval_hours)

        self.baseFilename = self._get_current_filename()
        self.stream = self._open()

    def emit(self, record):
        """Emit a record, reopening the file if its stream was closed."""
        if not _is_stream_usable(self.stream):
            try:
                self.stream = self._open()
            except (ValueError, OSError):
                return

        try:
            super().emit(record)
        except (ValueError, OSError) as error:
            if not any(phrase in str(error).lower() for phrase in _CLOSED_STREAM_PHRASES):
                raise
            try:
                self.stream = self._open()
                super().emit(record)
            except (ValueError, OSError):
                return

    def _cleanup_old_files(self) -> None:
        """Remove old log files beyond backup_count."""
        base_dir = os.path.dirname(self.base_filename) or '.'
        base_name = os.path.basename(self.base_filename)
        if base_name.endswith('.log'):
            base_name = base_name[:-4]

        log_files = []
        try:
            for filename in os.listdir(base_dir):
                if filename.startswith(base_name + '.') and filename.endswith('.log'):
                    filepath = os.path.join(base_dir, filename)
                    try:
                        log_files.append((os.path.getmtime(filepath), filepath))
                    except OSError:
                        continue
        except OSError:
            return

        log_files.sort()
        if len(log_files) > self.backup_count:
            for _, filepath in log_files[:-self.backup_count]:
                try:
                    os.remove(filepath)
                except OSError:
                    continue


def _is_stream_usable(stream) -> bool:
    """
    Check if a stream is usable for logging without triggering errors.

    Returns True if stream can be written to, False otherwise.
    """
    if stream is None:
        return False

    try:
        if getattr(stream, 'closed', False):
            return False
        return hasattr(stream, 'write')
    except (AttributeError, ValueError, OSError):
        return False


class SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that gracefully handles closed streams."""

    def emit(self, record):
        """Emit a record, dropping it if the stream was closed underneath us."""
        if not _is_stream_usable(self.stream):
            return

        try:
            super().emit(record)
        except (ValueError, OSError) as error:
            if any(phrase in str(error).lower() for phrase in _CLOSED_STREAM_PHRASES):
                return
            raise


class UnifiedFormatter(logging.Formatter):
    """Unified logging formatter with ANSI color support."""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARN': '\033[33m',     # Yellow
        'ERROR': '\033[31m',    # Red
        'CRIT': '\033[35m',     # Magenta
        'RESET': '\033[0m',     # Reset
        'BOLD': '\033[1m',      # Bold
    }

    LEVEL_MAP = {
        'DEBUG': 'DEBUG',
        'INFO': 'INFO',
        'WARNING': 'WARN',
        'ERROR': 'ERROR',
        'CRITICAL': 'CRIT'
    }

    def __init__(self, fmt=None, datefmt=None, style: Literal['%', '{', '$'] = '%', validate=True, **_kwargs):
        """
        Initialize formatter, accepting Uvicorn's use_colors parameter.
        We ignore use_colors since we handle our own color logic.
        """
        super().__init__(fmt=fmt, datefmt=datefmt, style=style, validate=validate)

    @staticmethod
    def abbreviate_source(name: str) -> str:
        """Four-letter tag for a logger name."""
        if name == '__main__':
            return 'MAIN'
        if name.startswith('routers'):
            return 'API'
        if name.startswith('config'):
            return 'CONF'
        if name.startswith('uvicorn'):
            return 'SRVR'
        if name == 'asyncio':
            return 'ASYN'
        if name.startswith('clients'):
            return 'CLIE'
        if name.startswith('services'):
            return 'SERV'
        if name.startswith('agents'):
            return 'AGNT'
        if name.startswith('httpx'):
            return 'HTTP'
        return name[:4].upper()

    def format(self, record):
        timestamp = self.formatTime(record, '%H:%M:%S')

        level_name = self.LEVEL_MAP.get(record.levelname, record.levelname)
        color = self.COLORS.get(level_name, '')
        reset = self.COLORS['RESET']

        if level_name == 'CRIT':
            colored_level = f"{self.COLORS['BOLD']}{color}{level_name.ljust(5)}{reset}"
        else:
            colored_level = f"{color}{level_name.ljust(5)}{reset}"

        source = self.abbreviate_source(record.name).ljust(4)

        # Normalize message spacing
        message = record.getMessage().lstrip()
        message = re.sub(r' +', ' ', message)
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return f"[{timestamp}] {colored_level} | {source} | [{os.getpid()}] {message}"


class UvicornInvalidRequestFilter(logging.Filter):
    """Filter to downgrade uvicorn 'Invalid HTTP request' warnings to DEBUG level."""
    def filter(self, record):
        if record.levelno == logging.WARNING:
            message = record.getMessage()
            if 'Invalid HTTP request' in message or 'invalid request' in message.lower():
                record.levelno = logging.DEBUG
                record.levelname = 'DEBUG'
        return True


class HTTPXRequestLogFilter(logging.Filter):
    """Reformat httpx request logs into the project log format.

    ``HTTP Request: POST https://dashscope.aliyuncs.com/compatible-mode/v1/chat/completions "HTTP/2 200 OK"``
    becomes ``DashScope API: POST /compatible-mode/v1/chat/completions → 200 OK``.
    """

    API_NAMES = {
        'dashscope': 'DashScope',
    }

    _PATTERN = re.compile(r'HTTP Request:\s+(\w+)\s+(https?://[^\s"]+)\s+"HTTP/[\d.]+\s+(\d+)\s+([^"]*)"')

    def _extract_api_name(self, url: str) -> str:
        url_lower = url.lower()
        for key, name in self.API_NAMES.items():
            if key in url_lower:
                return name
        return 'LLM'

    def reformat(self, message: str) -> str:
        match = self._PATTERN.match(message)
        if not match:
            return message
        method, url, status_code, status_text = match.groups()
        endpoint = urlparse(url).path or '/'
        return f"{self._extract_api_name(url)} API: {method} {endpoint} → {status_code} {status_text}".rstrip()

    def filter(self, record):
        message = record.getMessage()
        if message.startswith('HTTP Request:'):
            record.msg = self.reformat(message)
            record.args = ()
        return True


def setup_logging():
    """
    Configure all logging for the application.

    Sets up:
    - Console and file handlers with unified formatter
    - Logger levels and filters
    - Uvicorn logger configuration
    - httpx logger configuration
    """
    unified_formatter = UnifiedFormatter()

    handlers = []
    if _is_stream_usable(sys.stdout):
        console_handler = SafeStreamHandler(sys.stdout)
        console_handler.setFormatter(unified_formatter)
        handlers.append(console_handler)

    try:
        file_handler = TimestampedRotatingFileHandler(
            os.path.join("logs", "app.log"),
            interval_hours=72,  # Every 72 hours (3 days)
            backup_count=10,  # Keep 10 backup files (30 days of logs)
            encoding="utf-8"
        )
        file_handler.setFormatter(unified_formatter)
        handlers.append(file_handler)
    except OSError:
        if not handlers:
            handlers.append(logging.NullHandler())

    if config.verbose_logging:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, config.log_level, logging.INFO)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    for logger_name in ['services', 'clients', 'agents', 'routers', 'config']:
        specific_logger = logging.getLogger(logger_name)
        specific_logger.setLevel(log_level)
        specific_logger.propagate = True

    # Route uvicorn through our handlers
    for uvicorn_logger_name in ['uvicorn', 'uvicorn.error']:
        uvicorn_logger = logging.getLogger(uvicorn_logger_name)
        uvicorn_logger.handlers = list(handlers)
        uvicorn_logger.addFilter(UvicornInvalidRequestFilter())
        uvicorn_logger.propagate = False

    # External HTTP libraries stay at WARNING unless HTTP_DEBUG is set
    http_debug_enabled = os.getenv('HTTP_DEBUG', '').lower() in ('1', 'true', 'yes')
    http_level = logging.DEBUG if http_debug_enabled else logging.WARNING

    httpx_logger = logging.getLogger('httpx')
    httpx_logger.setLevel(http_level)
    httpx_logger.addFilter(HTTPXRequestLogFilter())
    logging.getLogger('httpcore').setLevel(http_level)
    # hpack/h2: HTTP/2 HPACK header compression - very verbose at DEBUG
    logging.getLogger('hpack').setLevel(http_level)
    logging.getLogger('h2').setLevel(http_level)

    logger = logging.getLogger(__name__)
    if os.getenv('UVICORN_WORKER_ID') is None:
        logger.debug("Logging initialized: %s", logging.getLevelName(log_level))

    return logger
