"""Root logger setup for the command line entry points."""

from __future__ import annotations

import logging

# Libraries that log every request or statement at INFO/DEBUG.
NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "sqlalchemy.engine", "alembic")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Send log records to stderr at INFO, or DEBUG when ``verbose``.

    Per-record decisions of the engine are logged at DEBUG. Third-party
    request and SQL chatter is kept at WARNING.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
