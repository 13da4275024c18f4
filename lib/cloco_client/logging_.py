from __future__ import annotations

import logging

TRACE = 5
ROOT_LOGGER = "cloco_client"

logging.addLevelName(TRACE, "TRACE")


def get_logger(name: str | None = None) -> logging.Logger:
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(verbosity: int = 0) -> None:
    if verbosity >= 2:
        level = TRACE
    elif verbosity == 1:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger(ROOT_LOGGER).setLevel(level)

    # httpx is noisy below WARNING; only let it through at trace verbosity
    transport_level = logging.DEBUG if verbosity >= 2 else logging.WARNING
    logging.getLogger("httpx").setLevel(transport_level)
    logging.getLogger("httpcore").setLevel(transport_level)
