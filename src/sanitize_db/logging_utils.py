"""
Logging configuration for sanitizer runs.

Stage boundaries and "Processed N users" checkpoints are INFO on the
``sanitize_db`` loggers; per-batch row counts from the bulk mutator are
DEBUG and only shown with ``verbose``. Third-party loggers stay at WARNING
unless SQL logging is asked for explicitly.
"""

import logging
import logging.handlers
import sys

PACKAGE_LOGGER = 'sanitize_db'

LOG_FORMAT = '[%(asctime)s] %(levelname)s [%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Rotating log file: 10MB x 5
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

QUIET_LOGGERS = ['sqlalchemy.engine', 'sqlalchemy.pool', 'faker', 'urllib3']


def _file_handler(log_file, formatter):
    try:
        handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        )
    except OSError as e:
        print(f"Warning: Could not create log file {log_file}: {e}", file=sys.stderr)
        return None
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_file=None, verbose=False, log_sql=False):
    """
    Configure logging for a sanitizer run.

    Args:
        log_file: Also append to this rotating file (None = stdout only)
        verbose: Show the sanitizer's DEBUG output (per-batch progress)
        log_sql: Log every SQL statement (sqlalchemy.engine at INFO)
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    handlers = [console]

    if log_file:
        file_handler = _file_handler(log_file, formatter)
        if file_handler is not None:
            handlers.append(file_handler)

    logging.basicConfig(level=logging.INFO, handlers=handlers, force=True)

    # verbose applies to our own loggers only; libraries keep their levels
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if log_sql:
        logging.getLogger('sqlalchemy.engine').setLevel(logging.INFO)
