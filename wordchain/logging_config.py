import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str = "INFO"):
    """
    Install the stdout handler on the root logger.

    Called by entry points (CLI, app factory); importing the package
    never configures logging by itself.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def get_logger(name: str):
    """
    Return the logger for a module.
    """
    return logging.getLogger(name)
