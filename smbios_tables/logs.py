"""Logging setup for the smbios-tables command."""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class LogManager:
    """Manages logging for the package loggers."""

    def __init__(self, name: str, log_dir: Optional[Path] = None, level: str = "WARNING"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

        # Replace handlers from an earlier invocation in the same process
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        # Console handler; stdout is reserved for table output
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(formatter)
        self.logger.addHandler(ch)

        # File handler
        if log_dir:
            self.log_dir = Path(log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(self.log_dir / f"{name}.log")
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(formatter)
            self.logger.addHandler(fh)

    def get_logger(self) -> logging.Logger:
        """Get configured logger."""
        return self.logger
