import logging
import sys

LOGGER_NAME = "edpatch"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class _EdpatchHandler(logging.StreamHandler):
    pass


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Attach a stderr handler to the `edpatch` logger.

    Calling it again replaces the handler it installed before. Propagation is
    disabled so records are not duplicated by the root logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, _EdpatchHandler):
            logger.removeHandler(handler)

    handler = _EdpatchHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
