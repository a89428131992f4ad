import logging
import sys

from core.settings import settings

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'


def setup_logger(name: str = 'orgstructure', level: str = 'INFO') -> logging.Logger:
    """Единый логгер приложения: один stream-хендлер, уровень из настроек."""
    log = logging.getLogger(name)
    log.setLevel(level.upper())

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)

    log.propagate = False
    return log


logger = setup_logger(level=settings.LOG_LEVEL)
