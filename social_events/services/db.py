# social_events/services/db.py
import logging
import os

from pymongo import MongoClient
from pymongo.errors import ServerSelectionTimeoutError
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from .env
load_dotenv()


def default_mongo_url():
    if os.path.exists("/.dockerenv") or os.getenv("RUNNING_IN_DOCKER") == "1":
        return "mongodb://mongo:27017"
    return "mongodb://127.0.0.1:27017"


MONGO_URL = os.getenv("DB_URI") or os.getenv("MONGO_URL") or default_mongo_url()
DB_NAME = os.getenv("DB_NAME", "socialdevelopment")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

EVENTS_COLLECTION = "events"
JOINED_EVENTS_COLLECTION = "joinedEvents"


def connect(url: str = None, timeout_ms: int = 5000) -> MongoClient:
    """Open a client and ping the deployment; raises if the server is unreachable."""
    url = url or MONGO_URL
    logger.info(f"[DB] Connecting to: {url}")

    client = MongoClient(url, serverSelectionTimeoutMS=timeout_ms)
    try:
        client.admin.command("ping")
        logger.info("[DB] Connected to MongoDB")
    except ServerSelectionTimeoutError as e:
        logger.error(f"[DB] Could not connect: {e}")
        client.close()
        raise
    return client
