"""
Process-wide logging setup.

Each module owns `logger = logging.getLogger(__name__)`; this only wires
the root handler once. Under gunicorn the access/error logs go to stdout
(see gunicorn.conf.py) and these records land next to them.
"""
import logging

from diary_insight.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=_FORMAT,
    )
