# social_events/models/event.py
# Request and response models for events and join records.
# Field names follow the JSON the web client sends (camelCase).

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing import List, Optional
from datetime import datetime, timezone


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """MongoDB hands back naive UTC datetimes, so store them that way too."""
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_utc_iso(value: Optional[datetime]) -> Optional[str]:
    """Render a stored (naive UTC) datetime with an explicit +00:00 offset."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


# -----------------------------
# Event input model
# -----------------------------

class EventInput(BaseModel):
    """
    Event body for both create and update.
    organizerEmail is the ownership key: stored on create, matched on update.
    Required fields are checked by the store so that a missing value is
    reported as a 400 with the usual error body.
    """
    eventName: Optional[str] = None
    organizerEmail: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    eventDate: Optional[datetime] = None

    @field_validator("eventDate")
    @classmethod
    def normalize_event_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


# -----------------------------
# Event output models
# -----------------------------

class EventOut(BaseModel):
    """Event as stored, with the ObjectId rendered as a string under _id"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    eventName: str
    organizerEmail: str
    category: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    eventDate: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    participants: int = 0

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v) -> str:
        return str(v)

    @field_serializer("eventDate", "createdAt")
    def serialize_utc(self, value: Optional[datetime]) -> Optional[str]:
        return to_utc_iso(value)


class EventResponse(BaseModel):
    success: bool = True
    event: EventOut


class EventListResponse(BaseModel):
    success: bool = True
    events: List[EventOut]


# -----------------------------
# Join models
# -----------------------------

class JoinRequest(BaseModel):
    eventId: Optional[str] = None
    userEmail: Optional[str] = None


# -----------------------------
# Mutation results
# -----------------------------

class InsertResponse(BaseModel):
    success: bool = True
    insertedId: str
    message: str


class UpdateResponse(BaseModel):
    success: bool = True
    message: str
    modifiedCount: int


class DeleteResponse(BaseModel):
    success: bool = True
    message: str
    deletedCount: int
