# services/trip_store.py
from __future__ import annotations
import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from core.exceptions import TripStoreError
from models.records import EventConfig, TripRecord, TripTotals
from models.trip import Trip, TripResult

TRIPS_FILE = "trips.json"
EVENT_FILE = "event.json"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TripStore:
    """
    JSON-file store for calculated trips and the event configuration.
    One instance per data directory; writes are serialized with a lock.
    """

    _lock = threading.Lock()

    def __init__(self, root: Optional[Path] = None):
        if root is None:
            from config import get_data_dir

            root = get_data_dir()
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    # ---------- raw io ----------
    def _read(self, name: str):
        path = self.root / name
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise TripStoreError(f"Could not read {path}: {e}")

    def _write(self, name: str, payload) -> None:
        path = self.root / name
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise TripStoreError(f"Could not write {path}: {e}")

    # ---------- trips ----------
    def list_trips(self) -> List[TripRecord]:
        with self._lock:
            raw = self._read(TRIPS_FILE) or []
        try:
            return [TripRecord.model_validate(r) for r in raw]
        except ValidationError as e:
            raise TripStoreError(f"Corrupt trip store: {e}")

    def save_trip(self, trip: Trip, result: TripResult) -> TripRecord:
        record = TripRecord(trip=trip, result=result, calculated_at=_now_iso())
        with self._lock:
            raw = self._read(TRIPS_FILE) or []
            raw.append(record.model_dump(mode="json"))
            self._write(TRIPS_FILE, raw)
        return record

    def delete_trip(self, index: int) -> TripRecord:
        with self._lock:
            raw = self._read(TRIPS_FILE) or []
            if index < 0 or index >= len(raw):
                raise IndexError(f"No trip at index {index}")
            removed = raw.pop(index)
            self._write(TRIPS_FILE, raw)
        return TripRecord.model_validate(removed)

    def clear_trips(self) -> int:
        with self._lock:
            raw = self._read(TRIPS_FILE) or []
            self._write(TRIPS_FILE, [])
        return len(raw)

    def totals(self, records: Optional[List[TripRecord]] = None) -> TripTotals:
        records = self.list_trips() if records is None else records
        return TripTotals(
            total_emission_kg=sum(r.result.total_emission_kg for r in records),
            total_carbon_credits_tonnes=sum(r.result.carbon_credits_tonnes for r in records),
            total_tree_equivalent=sum(r.result.tree_equivalent for r in records),
            trip_count=len(records),
        )

    # ---------- event ----------
    def get_event(self) -> Optional[EventConfig]:
        with self._lock:
            raw = self._read(EVENT_FILE)
        if not raw:
            return None
        try:
            return EventConfig.model_validate(raw)
        except ValidationError as e:
            raise TripStoreError(f"Corrupt event config: {e}")

    def save_event(self, event: EventConfig) -> EventConfig:
        with self._lock:
            self._write(EVENT_FILE, event.model_dump(mode="json"))
        return event

    def remove_event(self) -> bool:
        path = self.root / EVENT_FILE
        with self._lock:
            if not path.exists():
                return False
            try:
                path.unlink()
            except OSError as e:
                raise TripStoreError(f"Could not remove {path}: {e}")
        return True
