# backend/projectmanager/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler

from ..config import Settings

console_formatter = logging.Formatter(
    '\033[1;36m%(asctime)s\033[0m - \033[1;33m%(name)s\033[0m - \033[1;35m%(levelname)s\033[0m [\033[1;34m%(module)s:%(lineno)d\033[0m] - %(message)s'
)
file_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s [%(module)s:%(lineno)d] - %(message)s'
)

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Attribute names every LogRecord already carries; extra= may not overwrite them
RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class ProjectManagerLogger:
    """Component logger taking structured context through ``extra``.

    Writes to the console from the start; the rotating log file is added by
    ``configure_logging`` once the application knows its log directory.
    """

    def __init__(self, component: str):
        self.component = component
        self.logger = logging.getLogger(f"projectmanager.{component}")
        self.logger.setLevel(logging.INFO)

        if not any(type(h) is logging.StreamHandler for h in self.logger.handlers):
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

    def use_log_file(self, path) -> None:
        """Send this component's records to ``path``, replacing any previous file"""
        for handler in list(self.logger.handlers):
            if isinstance(handler, RotatingFileHandler):
                self.logger.removeHandler(handler)
                handler.close()

        file_handler = RotatingFileHandler(path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS)
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)

    @staticmethod
    def _context(extra):
        if not extra:
            return None
        return {
            (f"extra_{key}" if key in RESERVED_ATTRS else key): value
            for key, value in extra.items()
        }

    def info(self, msg, extra=None, exc_info=None):
        self.logger.info(msg, extra=self._context(extra), exc_info=exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self.logger.warning(msg, extra=self._context(extra), exc_info=exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self.logger.error(msg, extra=self._context(extra), exc_info=exc_info)


api_logger = ProjectManagerLogger("api")
db_logger = ProjectManagerLogger("database")
service_logger = ProjectManagerLogger("service")

COMPONENT_LOGGERS = (api_logger, db_logger, service_logger)


def configure_logging(app_settings: Settings) -> None:
    """Point every component log file at ``LOGS_PATH`` and apply ``LOG_LEVEL``"""
    log_dir = app_settings.LOGS_PATH
    log_dir.mkdir(parents=True, exist_ok=True)
    level = logging.getLevelName(app_settings.LOG_LEVEL)

    for component_logger in COMPONENT_LOGGERS:
        component_logger.use_log_file(log_dir / f"{component_logger.component}.log")
        component_logger.logger.setLevel(level)


__all__ = ["api_logger", "db_logger", "service_logger", "configure_logging"]
