# services/export.py
from __future__ import annotations
import csv
import io
from datetime import datetime, timezone
from typing import List

from models.records import TripExport, TripRecord, TripTotals
from models.trip import TransportMode, Trip, TripSegment

BOM = "﻿"  # lets Excel detect UTF-8

MODE_LABELS = {
    TransportMode.PLANE: "Plane",
    TransportMode.CAR: "Car",
    TransportMode.BUS: "Bus",
    TransportMode.TRAIN: "Train",
    TransportMode.METRO: "Metro",
    TransportMode.MOTORCYCLE: "Motorcycle",
    TransportMode.SHIP: "Ship/Boat",
}

CSV_HEADERS = [
    "Name",
    "Email",
    "Document",
    "Phone",
    "Segments (Origin → Destination)",
    "Destination (City)",
    "Destination (State)",
    "Destination (Country)",
    "Travel Date",
    "Return Date",
    "Round Trip",
    "Total Distance (km)",
    "CO₂ Emission (kg)",
    "Carbon Credits (tCO₂)",
    "Equivalent Trees",
    "Notes",
]


def mode_label(mode) -> str:
    if mode is None:
        return "-"
    return MODE_LABELS.get(mode, str(mode))


def describe_segment(i: int, segment: TripSegment, trip: Trip) -> str:
    origin = ""
    if segment.origin_locality:
        origin = f"{segment.origin_locality}, {segment.origin_region or ''}".rstrip(", ")
    elif segment.origin_postal_code:
        origin = f"Postal code: {segment.origin_postal_code}"
    if segment.destination_locality:
        dest = f"{segment.destination_locality}, {segment.destination_region or ''}"
    else:
        dest = f"{trip.destination_locality}, {trip.destination_region}"
    return f"Segment {i + 1}: {mode_label(segment.mode)} ({origin} → {dest.rstrip(', ')})"


def export_json(records: List[TripRecord], totals: TripTotals) -> TripExport:
    return TripExport(
        trips=records,
        totals=totals,
        exported_at=datetime.now(timezone.utc).isoformat(),
    )


def export_csv(records: List[TripRecord], totals: TripTotals) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerow(CSV_HEADERS)
    for rec in records:
        trip, result = rec.trip, rec.result
        segments = "; ".join(
            describe_segment(i, s, trip) for i, s in enumerate(trip.segments)
        )
        w.writerow(
            [
                trip.traveler_name or "",
                trip.traveler_email or "",
                trip.traveler_document or "",
                trip.traveler_phone or "",
                segments or "N/A",
                trip.destination_locality,
                trip.destination_region,
                trip.destination_country or "",
                trip.travel_date or "",
                trip.return_date or "",
                "Yes" if trip.round_trip else "No",
                result.total_distance_km,
                result.total_emission_kg,
                result.carbon_credits_tonnes,
                result.tree_equivalent,
                trip.notes or "",
            ]
        )
    # totals sit under their columns, after the 11 descriptive ones
    w.writerow(
        [""] * 11
        + [
            "TOTALS",
            f"{totals.total_emission_kg:.2f}",
            f"{totals.total_carbon_credits_tonnes:.3f}",
            str(totals.total_tree_equivalent),
            "",
        ]
    )
    return BOM + buf.getvalue()
