"""
Logging Service - Structured logging for the watch face host and renderer
"""
import sys
import logging
from typing import Optional


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class LoggingService:
    """
    Thin wrapper around a named stdlib logger with a single stdout handler.
    """

    def __init__(self, name: str = 'superintendent', level: str = 'INFO'):
        """
        Initialize logging service.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        self._logger = logging.getLogger(name)
        self._set_level(level)
        self._setup_handlers()

    def _set_level(self, level: str) -> None:
        """Set logging level from string, unknown names fall back to INFO"""
        log_level = getattr(logging, str(level).upper(), None)
        if not isinstance(log_level, int):
            log_level = logging.INFO
        self._logger.setLevel(log_level)

    def _setup_handlers(self) -> None:
        """Replace any existing handlers with one stdout handler"""
        self._logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self._logger.level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

        self._logger.addHandler(console_handler)

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(message, extra=kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        """
        Log error message.

        Args:
            message: Error message
            exc_info: Include exception traceback
            **kwargs: Additional context
        """
        self._logger.error(message, exc_info=exc_info, extra=kwargs)

    def critical(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self._logger.critical(message, exc_info=exc_info, extra=kwargs)

    def set_level(self, level: str) -> None:
        """
        Change logging level dynamically.

        Args:
            level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        self._set_level(level)
        for handler in self._logger.handlers:
            handler.setLevel(self._logger.level)

    def log_startup(self, version: str, summary: dict) -> None:
        """
        Log application startup banner.

        Args:
            version: Application version
            summary: Configuration summary
        """
        display = summary.get('display', {})
        self.info("=" * 60)
        self.info(f"Superintendent watch face v{version} starting up")
        self.info(f"Python: {sys.version.split()[0]}")
        self.info(f"Timezone: {summary.get('timezone', 'UTC')}")
        self.info(f"Display: {display.get('width', 0)}x{display.get('height', 0)} "
                  f"via {display.get('backend', 'pygame')}")
        self.info(f"Expression: {summary.get('expression', 'idle')}"
                  f"{' (auto-cycle)' if summary.get('auto_cycle') else ''}")
        self.info("=" * 60)

    def log_shutdown(self) -> None:
        self.info("=" * 60)
        self.info("Superintendent watch face shutting down")
        self.info("=" * 60)

    @property
    def logger(self) -> logging.Logger:
        """Get underlying logger instance"""
        return self._logger


_logging_service: Optional[LoggingService] = None


def get_logger(name: str = 'superintendent', level: str = 'INFO') -> LoggingService:
    """
    Get or create the logging service singleton.

    Args:
        name: Logger name
        level: Log level

    Returns:
        LoggingService instance
    """
    global _logging_service
    if _logging_service is None:
        _logging_service = LoggingService(name, level)
    return _logging_service
