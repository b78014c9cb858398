import logging
import os
from logging.handlers import RotatingFileHandler
from agriweather.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggerConfig:
    """
    Application logger: console output plus an optional rotating file
    (10 MB x 5) under ``log_directory``.

    Components log through the shared ``logs.log(...)`` helper.
    """
    def __init__(
        self, level=20, logger_name="AgriWeather", log_directory="logs",
        log_file="app.log", to_file=True
    ):
        self.level = level
        self.logger = logging.getLogger(logger_name)
        self.log_file_path = None
        if to_file:
            log_directory = os.path.abspath(log_directory)
            self.log_file_path = os.path.join(log_directory, log_file)
        try:
            self._attach_handlers()
        except OSError as e:
            # Read-only filesystems (e.g. serverless) still get console logs
            print(f"Failed to setup file logging: {str(e)}")
            self.log_file_path = None
            self._attach_handlers()

    def _attach_handlers(self):
        # Re-importing the module must not duplicate output
        if self.logger.handlers:
            return
        formatter = logging.Formatter(LOG_FORMAT)
        handlers = [logging.StreamHandler()]
        if self.log_file_path:
            os.makedirs(os.path.dirname(self.log_file_path), exist_ok=True)
            handlers.append(RotatingFileHandler(
                self.log_file_path, backupCount=5, maxBytes=1024 * 1024 * 10, encoding="utf-8"
            ))
        for handler in handlers:
            handler.setLevel(self.level)
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        self.logger.setLevel(self.level)

    def log(self, level: int, message: str, extra: dict = None):
        """Simple wrapper to log messages"""
        if extra:
            message = f"{message} | {extra}"
        self.logger.log(level, message)


# Initialize Logger
logs = LoggerConfig(
    level=settings.LOGGER,
    logger_name="AGRIWEATHER-BE",
    log_directory="logs",
    log_file="app.log",
    to_file=settings.LOG_TO_FILE,
)
