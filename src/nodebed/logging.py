"""Logging configuration for nodebed"""

import logging
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler

LOG_FORMAT = '%(asctime)s.%(msecs)03d - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# (file name, level, nodebed records only)
LOG_FILES = (
    ("debug.log", logging.DEBUG, True),
    ("info.log", logging.INFO, False),
    ("error.log", logging.ERROR, False),
)


class ProjectOnlyFilter(logging.Filter):
    """Filter to only allow logs from nodebed.* modules"""

    def filter(self, record):
        return record.name.startswith('nodebed.')


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = TimedRotatingFileHandler(
        filename=path, when='midnight', backupCount=30, encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(testbed_path: Path, console_level: str = "INFO") -> None:
    """Route log records to rotating files under ``<testbed>/logs``

    ``debug.log`` only takes nodebed's own records; ``info.log`` and
    ``error.log`` take everything at their level. The console handler
    writes to stderr so command output on stdout stays clean.
    """
    logs_dir = testbed_path / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Drop handlers from an earlier call so records are not duplicated
    root_logger.handlers.clear()

    for name, level, project_only in LOG_FILES:
        handler = _file_handler(logs_dir / name, level, formatter)
        if project_only:
            handler.addFilter(ProjectOnlyFilter())
        root_logger.addHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level.upper())
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).debug(f"Logging initialized for testbed: {testbed_path}")
