# Backend/reset_db.py
import logging

from moodjournal.core.database import Base, engine

logger = logging.getLogger(__name__)


def reset_database():
    logger.warning("Dropping all tables...")
    Base.metadata.drop_all(bind=engine)

    logger.info("Recreating tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables recreated successfully.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    reset_database()
