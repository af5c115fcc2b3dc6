import logging
import time
from sqlalchemy.exc import OperationalError

from core.database import engine
from core.models import Base

logger = logging.getLogger(__name__)


def init_db(attempts: int = 7):
    logger.info("Creating database tables...")

    for attempt in range(1, attempts + 1):
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Done.")
            return
        except OperationalError as e:
            logger.warning("DB not ready (attempt %s/%s): %s", attempt, attempts, e)
            time.sleep(min(2 * attempt, 10))

    raise RuntimeError("Database not reachable after retries. Startup aborted.")
