"""
Process-wide logging setup.

Called once by the app factory so that cache/fetch logs from
renda.services.* share one format and one stdout handler.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-28s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # httpx logs every request line at INFO
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
