import logging
import sys

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
# parserul multipart loghează fiecare câmp pe DEBUG
QUIET_LOGGERS = ("multipart", "python_multipart", "httpx")


def setup_logging(level: str = "INFO"):
    root = logging.getLogger()
    level = level.upper()
    for name in UVICORN_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if root.handlers:
        return
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    root.addHandler(handler)
