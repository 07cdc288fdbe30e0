# social_events/services/event_store.py
import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from social_events.services.errors import (
    ForbiddenError,
    NotFoundError,
    ServiceError,
    ValidationError,
    storage_errors,
)

logger = logging.getLogger(__name__)

# Fields an organizer may change after creation
UPDATABLE_FIELDS = ("eventName", "category", "location", "description", "image", "eventDate")


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


def parse_object_id(value: str) -> ObjectId:
    if not value or not ObjectId.is_valid(value):
        raise ValidationError("Invalid event ID format.")
    return ObjectId(value)


class EventStore:
    """Ownership-tagged event documents.

    Mutations match on both _id and organizerEmail, so a missing event and an
    event owned by someone else produce the same ForbiddenError.
    """

    def __init__(self, collection: Collection):
        self.collection = collection
        self._delete_hooks: List[Callable[[str], object]] = []

    def add_delete_hook(self, hook: Callable[[str], object]) -> None:
        """Register a callback run with the event id after a successful delete."""
        self._delete_hooks.append(hook)

    @storage_errors("Failed to insert event into database.")
    def create(self, fields: Dict) -> str:
        if _is_blank(fields.get("eventName")) or _is_blank(fields.get("organizerEmail")):
            raise ValidationError("Missing required fields.")

        event_dict = {
            "eventName": fields["eventName"],
            "organizerEmail": fields["organizerEmail"],
            "category": fields.get("category"),
            "location": fields.get("location"),
            "description": fields.get("description"),
            "image": fields.get("image"),
            "eventDate": fields.get("eventDate"),
            "createdAt": datetime.utcnow(),
            "participants": 0,
        }
        result = self.collection.insert_one(event_dict)
        logger.info(f"Created event {result.inserted_id} for {event_dict['organizerEmail']}")
        return str(result.inserted_id)

    @storage_errors("Failed to fetch upcoming events.")
    def list_upcoming(self, now: Optional[datetime] = None) -> List[Dict]:
        now = now or datetime.utcnow()
        cursor = self.collection.find({"eventDate": {"$gte": now}}).sort("eventDate", ASCENDING)
        return list(cursor)

    @storage_errors("Failed to fetch event.")
    def get_by_id(self, event_id: str) -> Dict:
        oid = parse_object_id(event_id)
        event = self.collection.find_one({"_id": oid})
        if not event:
            raise NotFoundError("Event not found.")
        return event

    @storage_errors("Failed to fetch organizer events.")
    def list_by_organizer(self, email: str) -> List[Dict]:
        if _is_blank(email):
            raise ValidationError("Organizer email is required.")
        cursor = self.collection.find({"organizerEmail": email}).sort("createdAt", DESCENDING)
        return list(cursor)

    @storage_errors("Failed to fetch events.")
    def find_by_ids(self, event_ids: Iterable[str]) -> List[Dict]:
        """Events for the given ids, earliest date first. Malformed ids match nothing."""
        oids = [ObjectId(i) for i in event_ids if i and ObjectId.is_valid(i)]
        if not oids:
            return []
        cursor = self.collection.find({"_id": {"$in": oids}}).sort("eventDate", ASCENDING)
        return list(cursor)

    @storage_errors("Failed to update event.")
    def update(self, event_id: str, email: str, fields: Dict) -> int:
        oid = parse_object_id(event_id)
        if _is_blank(email):
            raise ValidationError("Organizer email is required.")

        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if "eventName" in changes and _is_blank(changes["eventName"]):
            raise ValidationError("Event name cannot be empty.")

        query = {"_id": oid, "organizerEmail": email}
        if changes:
            result = self.collection.update_one(query, {"$set": changes})
            matched, modified = result.matched_count, result.modified_count
        else:
            # Nothing to write, but ownership still decides the outcome
            matched = self.collection.find_one(query, {"_id": 1}) is not None
            modified = 0

        if not matched:
            logger.warning(f"Update of event {event_id} rejected for {email}")
            raise ForbiddenError("No matching event found or you are not the organizer.")

        logger.info(f"Updated event {event_id} ({modified} modified)")
        return modified

    @storage_errors("Failed to delete event.")
    def delete(self, event_id: str, email: str) -> int:
        oid = parse_object_id(event_id)
        if _is_blank(email):
            raise ValidationError("Organizer email is required.")

        result = self.collection.delete_one({"_id": oid, "organizerEmail": email})
        if not result.deleted_count:
            logger.warning(f"Delete of event {event_id} rejected for {email}")
            raise ForbiddenError("No matching event found or you are not the organizer.")

        # Hooks get the canonical id, whatever case the caller typed
        canonical_id = str(oid)
        try:
            for hook in self._delete_hooks:
                hook(canonical_id)
        except ServiceError:
            logger.error(f"Event {canonical_id} was deleted but its dependent records were not removed")
            raise

        logger.info(f"Deleted event {canonical_id}")
        return result.deleted_count

    @storage_errors("Failed to update participant count.")
    def increment_participants(self, event_id: str) -> None:
        self.collection.update_one({"_id": parse_object_id(event_id)}, {"$inc": {"participants": 1}})
