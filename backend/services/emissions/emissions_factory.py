# services/emissions/emissions_factory.py
from __future__ import annotations
import logging
from functools import lru_cache
from typing import Literal, Optional

from .factors import EmissionFactorTable

logger = logging.getLogger(__name__)

PresetName = Literal["builtin", "csv"]


@lru_cache(maxsize=8)
def get_factors(
    preset: PresetName = "builtin", csv_path: Optional[str] = None
) -> EmissionFactorTable:
    """
    Return a cached factor table.
    - 'builtin' -> the standard per-passenger-km table
    - 'csv'     -> parse csv_path (or EMISSION_FACTORS_CSV), builtin on failure
    """
    if preset == "csv":
        if csv_path is None:
            from config import get_settings

            csv_path = get_settings().EMISSION_FACTORS_CSV
        try:
            return EmissionFactorTable.from_csv(csv_path, name="csv")
        except Exception as e:
            # Fallback so the backend still runs
            logger.warning(
                "Failed to parse emission factors CSV %s: %s. Using builtin factors.",
                csv_path,
                e,
            )
            return EmissionFactorTable.builtin()

    return EmissionFactorTable.builtin()


def default_factors() -> EmissionFactorTable:
    from config import get_settings

    preset = get_settings().EMISSION_FACTORS_PRESET
    return get_factors("csv" if preset == "csv" else "builtin")
