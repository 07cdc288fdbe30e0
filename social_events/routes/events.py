# social_events/routes/events.py
from typing import List, Optional

from fastapi import APIRouter, Depends

from social_events.models.event import (
    DeleteResponse,
    EventInput,
    EventListResponse,
    EventOut,
    EventResponse,
    InsertResponse,
    UpdateResponse,
)
from social_events.services.dependencies import get_event_store
from social_events.services.event_store import EventStore

router = APIRouter()


@router.post("/events", response_model=InsertResponse)
def create_event(event: EventInput, store: EventStore = Depends(get_event_store)):
    """Create an event owned by organizerEmail"""
    inserted_id = store.create(event.model_dump())
    return InsertResponse(insertedId=inserted_id, message="Event created successfully!")


@router.get("/events", response_model=List[EventOut])
def list_events(store: EventStore = Depends(get_event_store)):
    """Upcoming events as a bare array (kept for older clients)"""
    return [EventOut(**e) for e in store.list_upcoming()]


@router.get("/events/upcoming", response_model=EventListResponse)
def list_upcoming_events(store: EventStore = Depends(get_event_store)):
    events = store.list_upcoming()
    return EventListResponse(events=[EventOut(**e) for e in events])


@router.get("/events/organizer/{email}", response_model=EventListResponse)
def list_organizer_events(email: str, store: EventStore = Depends(get_event_store)):
    """Events created by one organizer, newest first"""
    events = store.list_by_organizer(email)
    return EventListResponse(events=[EventOut(**e) for e in events])


@router.get("/events/{event_id}", response_model=EventResponse)
def get_event(event_id: str, store: EventStore = Depends(get_event_store)):
    return EventResponse(event=EventOut(**store.get_by_id(event_id)))


@router.put("/events/{event_id}", response_model=UpdateResponse)
def update_event(event_id: str, update: EventInput, store: EventStore = Depends(get_event_store)):
    """Only the organizer may update; unset fields are left untouched"""
    fields = update.model_dump(exclude_unset=True, exclude={"organizerEmail"})
    modified = store.update(event_id, update.organizerEmail, fields)
    return UpdateResponse(message="Event updated successfully!", modifiedCount=modified)


@router.delete("/events/{event_id}", response_model=DeleteResponse)
def delete_event(
    event_id: str,
    organizerEmail: Optional[str] = None,
    store: EventStore = Depends(get_event_store),
):
    """Delete an event and every join record pointing at it"""
    deleted = store.delete(event_id, organizerEmail)
    return DeleteResponse(message="Event deleted successfully!", deletedCount=deleted)
