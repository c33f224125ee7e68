# app/domain/repositories/behavior_repo.py
import logging
import time
from typing import List
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from pydantic import ValidationError
from app.domain.errors import CollaboratorUnavailable
from app.domain.models.product import BehaviorEvent
from app.domain.services.constants import BEHAVIOR_HISTORY

logger = logging.getLogger(__name__)

# Event types that count as a behavior signal
BEHAVIOR_EVENTS = ["view", "add_to_cart", "purchase"]

class BehaviorRepo:
    """
    User behavior backed by the 'events' collection.
    Feeds the tag-affinity recommendation strategy.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "events"):
        self.col = db[collection_name]

    async def recent_events(self, user_id: str, limit: int = BEHAVIOR_HISTORY) -> List[BehaviorEvent]:
        """The user's last `limit` events, newest first (repeats kept)."""
        t0 = time.perf_counter()
        pipeline = [
            {"$match": {"event_type": {"$in": BEHAVIOR_EVENTS}, "user_id": user_id}},
            {"$addFields": {"ts": {"$toDate": "$timestamp"}}},
            {"$sort": {"ts": -1}},
            {"$limit": limit},
            {"$project": {"_id": 0, "product_id": 1, "event_type": 1}},
        ]
        try:
            docs = await self.col.aggregate(pipeline).to_list(length=limit)
        except PyMongoError as e:
            raise CollaboratorUnavailable("recent_events", e) from e

        events = []
        for d in docs:
            try:
                events.append(BehaviorEvent.model_validate(d))
            except ValidationError:
                logger.warning("skipping invalid behavior event user_id=%s doc=%s", user_id, d)
        logger.info("behavior db_ok user_id=%s items=%s db_time=%.3fs", user_id, len(events), time.perf_counter() - t0)
        return events
