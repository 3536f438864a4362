import logging
import sys
from typing import Optional

from qada.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a single stream handler to the ``qada`` logger tree."""
    global _handler

    root = logging.getLogger("qada")
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in root.handlers:
        root.addHandler(_handler)
