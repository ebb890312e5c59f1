import logging
from typing import Optional

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging once for the API process.
    Modules log through `logging.getLogger(__name__)`.
    """
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
