import logging
from datetime import date
from typing import Any, Dict, List, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.collection import Collection

from moodapi.errors import Conflict, InvalidRequest, NotFound, StorageFailure, TooManyRequests
from moodapi.schemas import MoodCreate, MoodUpdate

logger = logging.getLogger(__name__)

# Upper bound for December 9999; sorts after every valid YYYY-MM-DD string.
END_OF_CALENDAR = "9999-13-01"


def month_window(day: str) -> Tuple[str, str]:
    """Return the half-open ``[first of month, first of next month)`` range for ``day``.

    Both bounds are ``YYYY-MM-DD`` strings, so they compare lexically against
    stored dates.
    """
    start = date.fromisoformat(day).replace(day=1)
    if start.month == 12:
        if start.year == date.max.year:
            return start.isoformat(), END_OF_CALENDAR
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start.isoformat(), end.isoformat()


def serialize_mood(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "_id": str(doc.get("_id")),
        "userId": doc.get("userId"),
        "mood": doc.get("mood"),
        "note": doc.get("note") or "",
        "date": doc.get("date"),
        "deleted": bool(doc.get("deleted", False)),
    }


def _object_id(mood_id: str) -> ObjectId:
    try:
        return ObjectId(mood_id)
    except (InvalidId, TypeError) as exc:
        raise StorageFailure(str(exc)) from exc


class MoodService:
    """Business rules for mood entries kept in a single collection."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def list_moods(self, user_id: str) -> List[Dict[str, Any]]:
        if not user_id:
            raise InvalidRequest("Missing userId query parameter")
        cursor = self.collection.find({"userId": user_id, "deleted": False}).sort("date", DESCENDING)
        return [serialize_mood(doc) for doc in cursor]

    def get_mood(self, mood_id: str) -> Dict[str, Any]:
        doc = self.collection.find_one({"_id": _object_id(mood_id), "deleted": False})
        if doc is None:
            raise NotFound("Mood not found")
        return serialize_mood(doc)

    def create_mood(self, entry: MoodCreate) -> Dict[str, Any]:
        if not entry.userId or not entry.mood or not entry.date:
            raise InvalidRequest("Missing required fields: userId, mood or date")

        # Soft-deleted entries still block both checks.
        if self.collection.find_one({"userId": entry.userId, "date": entry.date}) is not None:
            logger.warning("Duplicate mood for user %s on %s", entry.userId, entry.date)
            raise Conflict("Mood already logged for this date")

        start, end = month_window(entry.date)
        count = self.collection.count_documents({"userId": entry.userId, "date": {"$gte": start, "$lt": end}})
        if count >= 1:
            logger.warning("Monthly limit reached for user %s (%s)", entry.userId, start[:7])
            raise TooManyRequests("You can post mood only once per month")

        doc = {
            "userId": entry.userId,
            "mood": entry.mood,
            "note": entry.note or "",
            "date": entry.date,
            "deleted": entry.deleted or False,
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Created mood %s for user %s", result.inserted_id, entry.userId)
        return serialize_mood(doc)

    def update_mood(self, mood_id: str, entry: MoodUpdate) -> Dict[str, str]:
        if not entry.mood or not entry.date:
            raise InvalidRequest("Mood and date are required")

        result = self.collection.update_one(
            {"_id": _object_id(mood_id)},
            {
                "$set": {
                    "mood": entry.mood,
                    "note": entry.note or "",
                    "date": entry.date,
                    "deleted": entry.deleted or False,
                }
            },
        )
        if result.matched_count == 0:
            raise NotFound("Mood not found")
        logger.info("Updated mood %s", mood_id)
        return {"message": "Mood updated successfully"}

    def delete_mood(self, mood_id: str) -> Dict[str, str]:
        result = self.collection.update_one({"_id": _object_id(mood_id)}, {"$set": {"deleted": True}})
        if result.matched_count == 0:
            raise NotFound("Mood not found")
        logger.info("Soft-deleted mood %s", mood_id)
        return {"message": "Mood deleted"}
