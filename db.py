import logging

import motor.motor_asyncio

from config import MONGO_DB, MONGO_URI

logger = logging.getLogger("filmycosmo.db")

mongo_client = None
mongo_db = None


async def connect_to_mongo(uri: str = MONGO_URI, db_name: str = MONGO_DB):
    """
    Call this on app startup.
    """
    global mongo_client, mongo_db

    if not uri:
        logger.warning("MONGO_URI not set, skipping Mongo connection")
        return

    mongo_client = motor.motor_asyncio.AsyncIOMotorClient(uri)
    mongo_db = mongo_client[db_name]
    logger.info("Connected to MongoDB db=%s", db_name)


async def close_mongo_connection():
    """
    Call this on app shutdown.
    """
    global mongo_client, mongo_db

    if mongo_client:
        mongo_client.close()
        logger.info("MongoDB connection closed")
    mongo_client = None
    mongo_db = None


def get_db():
    """
    Use this inside routes to get current DB.
    """
    return mongo_db
