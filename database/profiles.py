"""
Profile gateway backed by MongoDB.

Profiles are written by the registration service; the chat engine only
reads them to learn a searching user's gender.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from database.models import Profile

logger = logging.getLogger(__name__)


class MongoProfileGateway:
    """Read-only profile lookups in the users collection."""

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self.collection = collection

    async def get_profile(self, identity: int) -> Optional[Profile]:
        """
        Get a registered user's profile.

        Args:
            identity: Telegram user ID

        Returns:
            Profile or None if the user is not registered

        Raises:
            PyMongoError: If the profile store is unavailable
        """
        try:
            # The registration service may store IDs as strings
            doc = await self.collection.find_one(
                {"telegramId": {"$in": [identity, str(identity)]}}
            )
        except PyMongoError as e:
            logger.error(f"Error loading profile for {identity}: {e}")
            raise

        if not doc:
            return None

        try:
            return Profile.from_document(doc)
        except (KeyError, ValueError) as e:
            logger.warning(f"Incomplete profile for {identity}: {e}")
            return None
