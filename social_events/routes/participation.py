# social_events/routes/participation.py
from typing import List

from fastapi import APIRouter, Depends

from social_events.models.event import EventOut, InsertResponse, JoinRequest
from social_events.services.dependencies import get_ledger
from social_events.services.participation import ParticipationLedger

router = APIRouter()


@router.post("/join-event", response_model=InsertResponse)
def join_event(request: JoinRequest, ledger: ParticipationLedger = Depends(get_ledger)):
    inserted_id = ledger.join(request.eventId, request.userEmail)
    return InsertResponse(insertedId=inserted_id, message="Successfully joined the event!")


@router.get("/joined-events/{email}", response_model=List[EventOut])
def get_joined_events(email: str, ledger: ParticipationLedger = Depends(get_ledger)):
    """Events a user has joined, earliest date first"""
    return [EventOut(**e) for e in ledger.joined_events(email)]
