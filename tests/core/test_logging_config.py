import logging

from qada.core.logging_config import LOG_FORMAT, configure_logging


def test_configure_logging_is_idempotent():
    configure_logging("debug")
    configure_logging("warning")

    logger = logging.getLogger("qada")
    handlers = [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and h.formatter._fmt == LOG_FORMAT
    ]
    assert len(handlers) == 1
    assert logger.level == logging.WARNING
