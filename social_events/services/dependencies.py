# social_events/services/dependencies.py
from fastapi import Request
from pymongo.database import Database

from social_events.services.db import EVENTS_COLLECTION, JOINED_EVENTS_COLLECTION
from social_events.services.event_store import EventStore
from social_events.services.participation import ParticipationLedger


def build_components(database: Database):
    """Wire the store and ledger over one database handle and ensure indexes."""
    event_store = EventStore(database[EVENTS_COLLECTION])
    ledger = ParticipationLedger(database[JOINED_EVENTS_COLLECTION], event_store)
    ledger.ensure_indexes()
    return event_store, ledger


def get_event_store(request: Request) -> EventStore:
    return request.app.state.event_store


def get_ledger(request: Request) -> ParticipationLedger:
    return request.app.state.ledger
