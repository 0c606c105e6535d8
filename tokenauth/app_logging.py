import logging
from pythonjsonlogger.json import JsonFormatter


def setup_logger(level: str = 'INFO', json: bool = True) -> None:
    """Send log records from all loggers to stderr, as JSON by default."""
    logger = logging.getLogger()
    logger.setLevel(level.upper())
    if logger.handlers:     # Already configured, e.g. by the WSGI server.
        return

    logHandler = logging.StreamHandler()
    if json:
        formatter = JsonFormatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s',
            rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s'
        )
    logHandler.setFormatter(formatter)
    logger.addHandler(logHandler)
