from motor.motor_asyncio import AsyncIOMotorClient

from friend_api.config import settings

# Create MongoDB client
client = AsyncIOMotorClient(settings.MONGO_URI)
db = client[settings.MONGO_DB_NAME]

# Collection names
FRIEND_REQUESTS_COLLECTION = "friend_requests"
USERS_COLLECTION = "users"
