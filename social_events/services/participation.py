# social_events/services/participation.py
import logging
from datetime import datetime
from typing import Dict, List

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from social_events.services.errors import ConflictError, ValidationError, storage_errors
from social_events.services.event_store import EventStore, parse_object_id

logger = logging.getLogger(__name__)

JOIN_INDEX_NAME = "eventId_userEmail_unique"


class ParticipationLedger:
    """Join records linking a user email to an event id.

    Records reference events by id string only. Constructing a ledger
    registers its cascade with the event store, so deleting an event removes
    every record that points at it.
    """

    def __init__(self, collection: Collection, events: EventStore):
        self.collection = collection
        self.events = events
        events.add_delete_hook(self.cascade_delete_by_event)

    @storage_errors("Failed to prepare joined events collection.")
    def ensure_indexes(self) -> None:
        # One record per (event, user); join relies on this to detect duplicates
        self.collection.create_index(
            [("eventId", ASCENDING), ("userEmail", ASCENDING)],
            unique=True,
            name=JOIN_INDEX_NAME,
        )

    @storage_errors("Failed to fetch joined events.")
    def list_by_user(self, email: str) -> List[Dict]:
        return list(self.collection.find({"userEmail": email}))

    @storage_errors("Failed to join event.")
    def join(self, event_id: str, user_email: str) -> str:
        if not event_id or not user_email or not user_email.strip():
            raise ValidationError("Missing required fields.")
        # Canonical lower-case hex; the unique index compares strings
        event_id = str(parse_object_id(event_id))

        record = {
            "eventId": event_id,
            "userEmail": user_email,
            "joinedAt": datetime.utcnow(),
        }
        try:
            result = self.collection.insert_one(record)
        except DuplicateKeyError:
            logger.warning(f"{user_email} already joined event {event_id}")
            raise ConflictError("You have already joined this event.")

        # Only a successful insert bumps the counter
        self.events.increment_participants(event_id)
        logger.info(f"{user_email} joined event {event_id}")
        return str(result.inserted_id)

    @storage_errors("Failed to remove joined events.")
    def cascade_delete_by_event(self, event_id: str) -> int:
        event_id = str(parse_object_id(event_id))
        result = self.collection.delete_many({"eventId": event_id})
        if result.deleted_count:
            logger.info(f"Removed {result.deleted_count} join records for event {event_id}")
        return result.deleted_count

    def joined_events(self, email: str) -> List[Dict]:
        """Events the user has joined, earliest date first.

        Two lookups with no database join: records whose event was deleted
        simply find nothing in the second query.
        """
        event_ids = [r["eventId"] for r in self.list_by_user(email)]
        return self.events.find_by_ids(event_ids)
