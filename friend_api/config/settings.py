import os
import pathlib
from dotenv import dotenv_values

# Base directory
BASE_DIR = pathlib.Path(__file__).resolve().parent.parent.parent

# MongoDB defaults per environment
MONGODB_URI = {
    "development": "mongodb://localhost:27017/friend_requests_db",
    "test": "mongodb://localhost:27017/friend_requests_test",
    "production": "mongodb://mongodb:27017/friend_requests_db",
}


class Settings:
    """Application settings read from the .env file, overridden by the process environment"""

    def __init__(self, env_file: pathlib.Path = BASE_DIR / ".env"):
        self._values = dotenv_values(env_file) if env_file.exists() else {}

        self.ENVIRONMENT = self._get("ENVIRONMENT", "development")
        self.DEBUG = self._get("DEBUG", "false").lower() in ("1", "true", "yes")

        # MongoDB configuration
        self.MONGO_URI = (
            self._get("MONGO_URI")
            or self._get(f"MONGO_URI_{self.ENVIRONMENT.upper()}")
            or MONGODB_URI.get(self.ENVIRONMENT, MONGODB_URI["development"])
        )
        self.MONGO_DB_NAME = self._get("MONGO_DB_NAME", "friend_requests_db")

        # API metadata
        self.PROJECT_NAME = self._get("PROJECT_NAME", "Friend Request API")
        self.PROJECT_DESCRIPTION = self._get(
            "PROJECT_DESCRIPTION",
            "API for sending, accepting and refusing friend requests between users",
        )
        self.PROJECT_VERSION = self._get("PROJECT_VERSION", "1.0.0")
        self.API_V1_STR = self._get("API_V1_STR", "/api/v1")

        # CORS
        self.CORS_ORIGINS = [
            origin.strip()
            for origin in self._get("CORS_ORIGINS", "http://localhost:3000").split(",")
            if origin.strip()
        ]

        # Logging
        self.LOG_LEVEL = self._get("LOG_LEVEL", "INFO").upper()
        self.LOG_FORMAT = self._get(
            "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        self.LOG_DATE_FORMAT = self._get("LOG_DATE_FORMAT", "%Y-%m-%d %H:%M:%S")
        self.LOG_FILE = self._get("LOG_FILE")

    def _get(self, key: str, default=None):
        return os.getenv(key, self._values.get(key) or default)
