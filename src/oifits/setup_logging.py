"""Logging setup for oifits.

Attaches console and optional file handlers to the ``oifits`` package
logger. Modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oifits.settings import InternalConfig

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "oifits"


def configure_logging(config: "InternalConfig") -> logging.Logger:
    """Configure the package logger from ``config.logging``.

    Existing handlers of the package logger are replaced, so calling this
    twice does not duplicate output.

    Parameters
    ----------
    config : InternalConfig
        Resolved configuration; ``logging.level`` and ``logging.file`` are used.

    Returns
    -------
    logging.Logger
        The configured ``oifits`` logger.
    """
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.setLevel(log_level)
    for handler in pkg.handlers[:]:
        pkg.removeHandler(handler)
        handler.close()

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    pkg.addHandler(ch)

    # File handler
    if config.logging.file:
        log_path = Path(config.logging.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        pkg.addHandler(fh)

    logger.info("Logging: level=%s, file=%s", config.logging.level, config.logging.file)
    return pkg
