"""Singleton logging configuration.

setup_logging() configures the root logger once; later calls are
no-ops (guarded by a module-level flag) so library callers and the CLI
can both invoke it safely.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Noisy loggers pinned to WARNING regardless of the requested level
_SUPPRESSED_LOGGERS = (
    "truthguard.analysis.oracle",
)

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger and quiet chatty modules.

    Idempotent; the second call is a no-op.
    """
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    # Oracle misses are expected on most nodes; only surface them
    # when a caller explicitly lowers this logger's level.
    if level.upper() != "DEBUG":
        for name in _SUPPRESSED_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
