# api/trips_routes.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from pydantic import BaseModel, Field

from core.exceptions import TripStoreError, TripValidationError
from models.records import TripExport, TripRecord, TripTotals
from models.trip import Trip, TripResult, TripSegment
from services.calculator_factory import get_calculator
from services.export import export_csv, export_json
from services.trip_store import TripStore

router = APIRouter(prefix="/trips", tags=["trips"])


class TripRequest(BaseModel):
    """
    Same shape as Trip, but the destination may be left out: it is then taken
    from the configured event.
    """

    destination_locality: Optional[str] = None
    destination_region: Optional[str] = None
    destination_country: Optional[str] = None
    round_trip: bool = False
    segments: List[TripSegment] = Field(default_factory=list)
    gateway: Optional[str] = None  # override GEOCODING_GATEWAY for this call

    traveler_name: Optional[str] = None
    traveler_email: Optional[str] = None
    traveler_document: Optional[str] = None
    traveler_phone: Optional[str] = None
    travel_date: Optional[str] = None
    return_date: Optional[str] = None
    notes: Optional[str] = None

    def to_trip(self, store: TripStore) -> Trip:
        data = self.model_dump(exclude={"gateway"})
        if not data["destination_locality"] or not data["destination_region"]:
            try:
                event = store.get_event()
            except TripStoreError as e:
                raise HTTPException(status_code=500, detail=str(e))
            if event is None:
                raise HTTPException(
                    status_code=422,
                    detail="No destination given and no event configured.",
                )
            # only the fields left out come from the event
            data["destination_locality"] = data["destination_locality"] or event.locality
            data["destination_region"] = data["destination_region"] or event.region
            data["destination_country"] = data["destination_country"] or event.country
        return Trip(**data)


class DeleteResponse(BaseModel):
    status: str = "success"
    removed: int


async def _compute(req: TripRequest, store: TripStore) -> tuple[Trip, TripResult]:
    # the store does blocking file io; keep it off the event loop
    trip = await run_in_threadpool(req.to_trip, store)
    try:
        calculator = get_calculator(gateway_name=req.gateway)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        return trip, await calculator.compute_trip(trip)
    except TripValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/estimate", response_model=TripResult, summary="Compute a trip footprint")
async def estimate_trip(req: TripRequest):
    _, result = await _compute(req, TripStore())
    return result


@router.post("", response_model=TripRecord, summary="Compute and store a trip")
async def save_trip(req: TripRequest):
    store = TripStore()
    trip, result = await _compute(req, store)
    try:
        return await run_in_threadpool(store.save_trip, trip, result)
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=List[TripRecord])
def list_trips():
    try:
        return TripStore().list_trips()
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/totals", response_model=TripTotals)
def trip_totals():
    try:
        return TripStore().totals()
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{index}", response_model=DeleteResponse)
def delete_trip(index: int):
    try:
        TripStore().delete_trip(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return DeleteResponse(removed=1)


@router.delete("", response_model=DeleteResponse)
def clear_trips():
    try:
        return DeleteResponse(removed=TripStore().clear_trips())
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


def _export_filename(ext: str) -> str:
    return f"carbon_data_{date.today().isoformat()}.{ext}"


@router.get("/export/json", response_model=TripExport)
def export_trips_json():
    store = TripStore()
    try:
        records = store.list_trips()
        payload = export_json(records, store.totals(records))
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(
        content=payload.model_dump_json(indent=2),
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{_export_filename("json")}"'
        },
    )


@router.get("/export/csv")
def export_trips_csv():
    store = TripStore()
    try:
        records = store.list_trips()
        content = export_csv(records, store.totals(records))
    except TripStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{_export_filename("csv")}"'
        },
    )
