# api/event_routes.py
from fastapi import APIRouter, HTTPException

from core.exceptions import TripStoreError
from models.records import EventConfig
from services.trip_store import TripStore

router = APIRouter(prefix="/event", tags=["event"])


@router.get("", response_model=EventConfig)
def get_event():
    try:
        event = TripStore().get_event()
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if event is None:
        raise HTTPException(status_code=404, detail="No event configured")
    return event


@router.put("", response_model=EventConfig)
def put_event(event: EventConfig):
    try:
        return TripStore().save_event(event)
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("")
def delete_event():
    try:
        removed = TripStore().remove_event()
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "success", "removed": removed}
