# services/emissions/factors.py
from __future__ import annotations
import csv
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from models.trip import FlightClass, FuelType, TransportMode, TripSegment

Key = Tuple[str, str]  # (mode, attribute); attribute is "" for flat-rate modes

DEFAULT_FACTOR = 0.1  # kg CO2 / passenger-km for anything we don't know

# Attribute each mode's factor is keyed by, and the fallback when it's missing
_ATTRIBUTE_DEFAULTS: Dict[TransportMode, str] = {
    TransportMode.PLANE: FlightClass.ECONOMY.value,
    TransportMode.CAR: FuelType.GASOLINE.value,
}


class EmissionFactorTable:
    """
    Emission factors in kg CO2 per passenger-km.
    Keys are normalized lower-case tuples: (mode, attribute) where attribute is the
    flight class for planes, the fuel type for cars and "" for every other mode.
    Lookups never fail: unknown attributes fall back to the mode default, unknown
    modes to DEFAULT_FACTOR.
    """

    def __init__(
        self,
        table: Optional[Dict[Key, float]] = None,
        name: str = "custom",
        default_factor: float = DEFAULT_FACTOR,
    ) -> None:
        self.name = name
        self.table: Dict[Key, float] = table or {}
        self.default_factor = default_factor

    @staticmethod
    def _norm_key(mode: str, attribute: Optional[str] = None) -> Key:
        return (mode.strip().lower(), (attribute or "").strip().lower())

    def factor_for(
        self, mode: Optional[TransportMode], attribute: Optional[str] = None
    ) -> float:
        if mode is None:
            return self.default_factor

        fallback_attr = _ATTRIBUTE_DEFAULTS.get(mode)
        if fallback_attr is None:
            return float(self.table.get(self._norm_key(mode.value), self.default_factor))

        key = self._norm_key(mode.value, attribute or fallback_attr)
        if key in self.table:
            return float(self.table[key])
        fallback = self._norm_key(mode.value, fallback_attr)
        return float(self.table.get(fallback, self.default_factor))

    def lookup(self, segment: TripSegment) -> float:
        if segment.mode == TransportMode.PLANE:
            return self.factor_for(segment.mode, segment.flight_class)
        if segment.mode == TransportMode.CAR:
            return self.factor_for(segment.mode, segment.fuel_type)
        return self.factor_for(segment.mode)

    def entries(self) -> List[Dict[str, object]]:
        return [
            {"mode": mode, "attribute": attr or None, "factor_kg_per_pkm": value}
            for (mode, attr), value in sorted(self.table.items())
        ]

    # ---------- Loaders ----------
    @classmethod
    def from_csv(cls, csv_path: str | Path, *, name: str = "csv") -> "EmissionFactorTable":
        """
        Columns: mode, attribute, factor_kg_per_pkm. Attribute may be blank.
        Rows with an unknown mode or an unparsable factor are skipped.
        """
        csv_path = Path(csv_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"Emission factors not found: {csv_path}")

        known_modes = {m.value for m in TransportMode}
        table: Dict[Key, float] = {}
        with open(csv_path, newline="", encoding="utf-8") as f:
            rdr = csv.DictReader(f)
            for row in rdr:
                mode = (row.get("mode") or "").strip().lower()
                if mode not in known_modes:
                    continue
                try:
                    value = float(row.get("factor_kg_per_pkm") or "")
                except ValueError:
                    continue
                table[cls._norm_key(mode, row.get("attribute"))] = value

        if not table:
            raise RuntimeError(f"Could not parse any factors from {csv_path}.")
        return cls(table=table, name=name)

    @classmethod
    def builtin(cls, name: str = "builtin") -> "EmissionFactorTable":
        k = cls._norm_key
        table = {
            k("plane", "economy"): 0.255,
            k("plane", "business"): 0.510,
            k("plane", "first"): 0.765,
            k("car", "gasoline"): 0.192,
            k("car", "ethanol"): 0.115,
            k("car", "diesel"): 0.171,
            k("car", "electric"): 0.053,
            k("car", "hybrid"): 0.120,
            k("bus"): 0.089,
            k("train"): 0.041,
            k("metro"): 0.027,
            k("motorcycle"): 0.113,
            k("ship"): 0.019,
        }
        return cls(table=table, name=name)
