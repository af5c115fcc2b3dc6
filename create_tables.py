import logging

from core.config import settings
from core.database import SessionLocal
from core.init_db import init_db
from admins.service import upsert_admin

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("create_tables")


def main():
    init_db()

    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.warning("ADMIN_EMAIL and ADMIN_PASSWORD are not set, skipping admin setup")
        return

    db = SessionLocal()
    try:
        upsert_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    finally:
        db.close()


if __name__ == "__main__":
    main()
