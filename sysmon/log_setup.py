import logging
import sys
from logging.handlers import RotatingFileHandler

from sysmon import config


def setup_logging(log_file: str, console_level=logging.WARNING):
    # drop handlers left over from an earlier call
    root = logging.getLogger()
    while root.handlers:
        root.handlers.pop()

    root.setLevel(logging.INFO)
    fmt = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    # Console only on an interactive terminal, and quiet enough not to break the menu
    if sys.stdout.isatty():
        ch = logging.StreamHandler(sys.stdout)
        ch.setLevel(console_level)
        ch.setFormatter(fmt)
        root.addHandler(ch)

    if log_file:
        try:
            fh = RotatingFileHandler(log_file, maxBytes=config.LOG_MAX_BYTES,
                                     backupCount=config.LOG_BACKUP_COUNT)
            fh.setLevel(logging.INFO)
            fh.setFormatter(fmt)
            root.addHandler(fh)
        except OSError:
            logging.warning(f"Cannot write log file {log_file}, logging to console only")
