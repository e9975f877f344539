# file_explorer/utils/logger.py

import logging
import logging.handlers
from pathlib import Path

CONSOLE_FORMAT = '%(asctime)s - [%(levelname)s] - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - [%(levelname)s] - %(filename)s:%(lineno)d - %(message)s'
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


class LoggerManager:
    """
    Wires the explorer's loggers to the console and to a log file.

    Every module logs through `logging.getLogger(__name__)`; this class only
    decides where those records end up. The file receives everything from
    DEBUG up and rotates at 5 MB. The console threshold depends on the front
    end: the GUI shows INFO, the CLI only WARNING so that log lines do not
    interleave with its own output.
    """

    def __init__(self, log_file_name: str = 'explorer.log', console_level=logging.INFO,
                 log_dir: Path | None = None):
        """
        Args:
            log_file_name: File name of the log, created in log_dir.
            console_level: Lowest level echoed to the terminal.
            log_dir: Where the log file lives. Defaults to the project root.
        """
        base_dir = log_dir if log_dir is not None else Path(__file__).resolve().parents[2]
        self.log_file_path = base_dir / log_file_name
        self.console_level = console_level
        self.root_logger = logging.getLogger()

    def setup(self) -> bool:
        """
        Attaches the handlers to the root logger.

        Returns:
            False if logging was already configured (by an earlier call, or by
            a test runner) and nothing was changed.
        """
        if self.root_logger.hasHandlers():
            return False

        self.root_logger.setLevel(logging.DEBUG)
        self.root_logger.addHandler(self._build_handler(
            logging.StreamHandler(), self.console_level, logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S')
        ))
        self.root_logger.addHandler(self._build_handler(
            logging.handlers.RotatingFileHandler(
                self.log_file_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding='utf-8'
            ),
            logging.DEBUG,
            logging.Formatter(FILE_FORMAT),
        ))

        logging.getLogger(__name__).debug(f"Logging to '{self.log_file_path}'")
        return True

    @staticmethod
    def _build_handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        return handler


def setup_logging(log_file_name: str = 'explorer.log', console_level=logging.INFO) -> bool:
    """Configures logging for the whole application. Safe to call more than once."""
    return LoggerManager(log_file_name, console_level).setup()
