import logging
import sys

QUIET_LOGGERS = ("httpx", "httpcore", "anthropic", "openai")


def setup_logging(level: str = "INFO"):
    """
    Root logging to stdout. Client libraries that log every outbound request
    are held at WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
