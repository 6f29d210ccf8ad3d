"""
Configuration management for the Anonymous Chat Bot.

Loads settings from environment variables with validation.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Telegram Bot
    BOT_TOKEN: str = os.getenv("BOT_TOKEN", "")

    # MongoDB profile store
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://mongodb:27017/anonchat")
    PROFILES_COLLECTION: str = os.getenv("PROFILES_COLLECTION", "users")

    # Matchmaking
    MATCH_SWEEP_INTERVAL_SECONDS: float = float(os.getenv("MATCH_SWEEP_INTERVAL_SECONDS", "5"))

    # Application
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = os.getenv("LOG_FILE", "logs/bot.log")

    def validate(self) -> None:
        """
        Validate that all required settings are present.

        Raises:
            ValueError: If required settings are missing or invalid
        """
        if not self.BOT_TOKEN:
            raise ValueError("BOT_TOKEN is required")
        if not self.MONGODB_URI:
            raise ValueError("MONGODB_URI is required")
        if self.MATCH_SWEEP_INTERVAL_SECONDS < 0:
            raise ValueError("MATCH_SWEEP_INTERVAL_SECONDS must be >= 0")


# Create global settings instance
settings = Settings()

# Validate on import
try:
    settings.validate()
except ValueError as e:
    print(f"Configuration error: {e}")
    print("Please check your .env file and ensure all required variables are set.")
    exit(1)
