# adapters/offline/distance_tables.py
"""
Approximate road distances (km) used when no routing backend is available.

CITY_PAIR_KM covers long-haul hub pairs (plane/train); METRO_AREA_KM covers
localities inside the same metropolitan region, keyed by state code (road modes).
Both are looked up symmetrically and case-insensitively.
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple

CITY_PAIR_KM: Dict[Tuple[str, str], float] = {
    ("São Paulo", "Rio de Janeiro"): 430,
    ("São Paulo", "Brasília"): 1015,
    ("São Paulo", "Salvador"): 1200,
    ("São Paulo", "Belo Horizonte"): 586,
    ("Rio de Janeiro", "Brasília"): 1148,
    ("Rio de Janeiro", "Salvador"): 1200,
    ("Rio de Janeiro", "Belo Horizonte"): 434,
    ("Brasília", "Salvador"): 1080,
    ("Brasília", "Belo Horizonte"): 740,
    ("Salvador", "Belo Horizonte"): 950,
}

METRO_AREA_KM: Dict[str, Dict[Tuple[str, str], float]] = {
    "ES": {
        ("Vitória", "Vila Velha"): 15,
        ("Vitória", "Cariacica"): 20,
        ("Vitória", "Serra"): 25,
        ("Vitória", "Viana"): 30,
        ("Vitória", "Guarapari"): 45,
        ("Vitória", "Fundão"): 50,
        ("Vila Velha", "Cariacica"): 18,
        ("Vila Velha", "Serra"): 20,
        ("Cariacica", "Serra"): 22,
    },
    "SP": {
        ("São Paulo", "Guarulhos"): 20,
        ("São Paulo", "São Bernardo do Campo"): 25,
        ("São Paulo", "Santo André"): 22,
        ("São Paulo", "Osasco"): 18,
        ("São Paulo", "Campinas"): 100,
        ("Guarulhos", "São Bernardo do Campo"): 35,
        ("Guarulhos", "Santo André"): 32,
        ("São Bernardo do Campo", "Santo André"): 8,
        ("Osasco", "Barueri"): 12,
        ("Osasco", "Carapicuíba"): 15,
    },
    "RJ": {
        ("Rio de Janeiro", "Niterói"): 15,
        ("Rio de Janeiro", "São Gonçalo"): 25,
        ("Rio de Janeiro", "Duque de Caxias"): 20,
        ("Rio de Janeiro", "Nova Iguaçu"): 35,
        ("Niterói", "São Gonçalo"): 18,
        ("Niterói", "Maricá"): 30,
        ("São Gonçalo", "Itaboraí"): 20,
    },
    "MG": {
        ("Belo Horizonte", "Contagem"): 15,
        ("Belo Horizonte", "Betim"): 20,
        ("Belo Horizonte", "Ribeirão das Neves"): 25,
        ("Belo Horizonte", "Sabará"): 18,
        ("Contagem", "Betim"): 12,
        ("Contagem", "Ribeirão das Neves"): 20,
    },
    "PR": {
        ("Curitiba", "São José dos Pinhais"): 12,
        ("Curitiba", "Pinhais"): 10,
        ("Curitiba", "Colombo"): 15,
        ("Curitiba", "Araucária"): 20,
        ("São José dos Pinhais", "Pinhais"): 8,
    },
    "RS": {
        ("Porto Alegre", "Canoas"): 15,
        ("Porto Alegre", "Novo Hamburgo"): 35,
        ("Porto Alegre", "São Leopoldo"): 30,
        ("Porto Alegre", "Gravataí"): 20,
        ("Canoas", "Novo Hamburgo"): 25,
    },
    "BA": {
        ("Salvador", "Lauro de Freitas"): 20,
        ("Salvador", "Camaçari"): 35,
        ("Salvador", "Simões Filho"): 25,
        ("Lauro de Freitas", "Camaçari"): 25,
    },
    "PE": {
        ("Recife", "Olinda"): 8,
        ("Recife", "Jaboatão dos Guararapes"): 15,
        ("Recife", "Paulista"): 12,
        ("Recife", "Camaragibe"): 10,
        ("Olinda", "Paulista"): 10,
        ("Jaboatão dos Guararapes", "Camaragibe"): 12,
    },
    "CE": {
        ("Fortaleza", "Caucaia"): 18,
        ("Fortaleza", "Maracanaú"): 15,
        ("Fortaleza", "Eusébio"): 20,
        ("Caucaia", "Maracanaú"): 12,
    },
    "DF": {
        ("Brasília", "Taguatinga"): 25,
        ("Brasília", "Ceilândia"): 30,
        ("Brasília", "Planaltina"): 45,
        ("Brasília", "Gama"): 35,
    },
}


def _norm(name: str) -> str:
    return " ".join(name.split()).casefold()


def _index(pairs: Dict[Tuple[str, str], float]) -> Dict[Tuple[str, str], float]:
    out: Dict[Tuple[str, str], float] = {}
    for (a, b), km in pairs.items():
        out[(_norm(a), _norm(b))] = float(km)
        out[(_norm(b), _norm(a))] = float(km)
    return out


class DistanceTables:
    """Symmetric, case-insensitive view over the pair tables above."""

    def __init__(
        self,
        city_pairs: Optional[Dict[Tuple[str, str], float]] = None,
        metro_areas: Optional[Dict[str, Dict[Tuple[str, str], float]]] = None,
    ) -> None:
        self._city_pairs = _index(CITY_PAIR_KM if city_pairs is None else city_pairs)
        self._metro = {
            region.strip().upper(): _index(pairs)
            for region, pairs in (
                METRO_AREA_KM if metro_areas is None else metro_areas
            ).items()
        }

    def city_pair(self, origin: str, dest: str) -> Optional[float]:
        return self._city_pairs.get((_norm(origin), _norm(dest)))

    def metro_area(self, region: str, origin: str, dest: str) -> Optional[float]:
        pairs = self._metro.get(region.strip().upper())
        if not pairs:
            return None
        km = pairs.get((_norm(origin), _norm(dest)))
        # zero means "same locality" in the source data, never a usable estimate
        if km is None or km <= 0:
            return None
        return km
