# backend/tests/test_factors.py
import pytest

from models.trip import TransportMode, TripSegment
from services.emissions.emissions_factory import get_factors
from services.emissions.factors import DEFAULT_FACTOR, EmissionFactorTable

TABLE = EmissionFactorTable.builtin()


@pytest.mark.parametrize(
    "flight_class,expected",
    [
        ("economy", 0.255),
        ("business", 0.510),
        ("first", 0.765),
        ("FIRST", 0.765),
        (None, 0.255),
        ("premium-lounge", 0.255),
    ],
)
def test_plane_factor_by_class(flight_class, expected):
    seg = TripSegment(mode="plane", flight_class=flight_class)
    assert TABLE.lookup(seg) == pytest.approx(expected)


@pytest.mark.parametrize(
    "fuel,expected",
    [
        ("gasoline", 0.192),
        ("ethanol", 0.115),
        ("diesel", 0.171),
        ("electric", 0.053),
        ("hybrid", 0.120),
        (None, 0.192),
        ("hydrogen", 0.192),
    ],
)
def test_car_factor_by_fuel(fuel, expected):
    assert TABLE.lookup(TripSegment(mode="car", fuel_type=fuel)) == pytest.approx(expected)


@pytest.mark.parametrize(
    "mode,expected",
    [
        ("bus", 0.089),
        ("train", 0.041),
        ("metro", 0.027),
        ("motorcycle", 0.113),
        ("ship", 0.019),
    ],
)
def test_flat_mode_factors(mode, expected):
    assert TABLE.lookup(TripSegment(mode=mode)) == pytest.approx(expected)


def test_flat_modes_ignore_attributes():
    seg = TripSegment(mode="bus", fuel_type="diesel", flight_class="first")
    assert TABLE.lookup(seg) == pytest.approx(0.089)


def test_unset_mode_uses_default():
    assert TABLE.lookup(TripSegment()) == DEFAULT_FACTOR


def test_mode_missing_from_table_uses_default():
    partial = EmissionFactorTable(table={("bus", ""): 0.05})
    assert partial.factor_for(TransportMode.SHIP) == DEFAULT_FACTOR
    assert partial.factor_for(TransportMode.CAR, "diesel") == DEFAULT_FACTOR


def test_from_csv_skips_bad_rows(tmp_path):
    p = tmp_path / "f.csv"
    p.write_text(
        "mode,attribute,factor_kg_per_pkm\n"
        "car,diesel,0.2\n"
        "rocket,,9.9\n"
        "bus,,not-a-number\n"
        "ship,,0.02\n",
        encoding="utf-8",
    )
    table = EmissionFactorTable.from_csv(p)
    assert table.factor_for(TransportMode.CAR, "diesel") == pytest.approx(0.2)
    assert table.factor_for(TransportMode.SHIP) == pytest.approx(0.02)
    assert table.factor_for(TransportMode.BUS) == DEFAULT_FACTOR
    assert len(table.entries()) == 2


def test_bundled_csv_matches_builtin():
    from config import get_settings

    table = EmissionFactorTable.from_csv(get_settings().EMISSION_FACTORS_CSV)
    assert table.table == TABLE.table


def test_csv_preset_falls_back_to_builtin(tmp_path):
    table = get_factors("csv", str(tmp_path / "missing.csv"))
    assert table.name == "builtin"
    assert table.factor_for(TransportMode.TRAIN) == pytest.approx(0.041)
