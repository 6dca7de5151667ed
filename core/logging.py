import logging

from core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging() -> None:
    """
    Configure root logging once. basicConfig is a no-op if handlers already exist
    (uvicorn / pytest install their own).
    """
    level = getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # httpx logs every request at INFO, including relay urls
    logging.getLogger("httpx").setLevel(logging.WARNING)
