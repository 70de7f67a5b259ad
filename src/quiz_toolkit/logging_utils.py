"""
Logging setup.

Every module logs through logging.getLogger(__name__); nothing in the
toolkit configures handlers on import. Applications (or the examples)
call configure_logging() once at startup.
"""

import logging
import sys


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a timestamped single-line format."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # HTTP clients under the LLM/embedding SDKs log every request at INFO
    for noisy in ("httpx", "httpcore", "openai", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
