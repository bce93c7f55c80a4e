from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, ConfigurationError
import os

from answerbot.logger import logger
from answerbot.constants import MONGODB_DATABASE_NAME, MONGODB_SERVER_SELECTION_TIMEOUT_MS

try:
    mongo_url = os.environ.get("MONGO_URL")
    if not mongo_url:
        raise ValueError("MONGO_URL environment variable is not set")

    client = MongoClient(mongo_url, serverSelectionTimeoutMS=MONGODB_SERVER_SELECTION_TIMEOUT_MS)
    # Test the connection
    client.admin.command('ping')
    db = client[MONGODB_DATABASE_NAME]
    rate_limits = db["rate_limits"]  # Separate collection for rate limiting

    try:
        rate_limits.create_index("rate_limit_key", unique=True)
        db["commands"].create_index("name", unique=True)
        db["authorized_channels"].create_index("channelId", unique=True)
        db["conversations"].create_index("timestamp")
        logger.debug("MongoDB indexes created/verified")
    except Exception as e:
        logger.warning("Could not create MongoDB indexes: %s", e)

    logger.info("MongoDB connection established successfully")
except (ConnectionFailure, ConfigurationError, ValueError) as e:
    logger.critical("Failed to connect to MongoDB: %s", e)
    raise
except Exception as e:
    logger.critical("Unexpected error connecting to MongoDB: %s", e)
    raise
