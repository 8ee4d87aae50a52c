import logging
from typing import List, Optional

import httpx

from core.cache import TTLCache
from models.trip import Locality

logger = logging.getLogger(__name__)

# UF -> IBGE state code
STATE_CODES = {
    "AC": "12", "AL": "27", "AP": "16", "AM": "13", "BA": "29",
    "CE": "23", "DF": "53", "ES": "32", "GO": "52", "MA": "21",
    "MT": "51", "MS": "50", "MG": "31", "PA": "15", "PB": "25",
    "PR": "41", "PE": "26", "PI": "22", "RJ": "33", "RN": "24",
    "RS": "43", "RO": "11", "RR": "14", "SC": "42", "SP": "35",
    "SE": "28", "TO": "17",
}  # fmt: skip


def state_code(region: Optional[str]) -> Optional[str]:
    if not region:
        return None
    return STATE_CODES.get(region.strip().upper())


class IbgeLocalityDirectory:
    """Municipality listing per state from the IBGE localities API."""

    def __init__(
        self,
        base_url: str = "https://servicodados.ibge.gov.br/api/v1/localidades",
        timeout_s: float = 10.0,
        cache: Optional[TTLCache] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.cache = cache if cache is not None else TTLCache(ttl_seconds=86400)

    async def list_localities(self, region: str) -> List[Locality]:
        """Unknown states and provider failures both yield an empty list."""
        code = state_code(region)
        if code is None:
            return []
        uf = region.strip().upper()
        hit = self.cache.get(f"ibge|{uf}")
        if hit is not None:
            return hit

        url = f"{self.base_url}/estados/{code}/municipios"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                rows = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("IBGE locality listing failed for %s: %s", uf, e)
            return []

        localities = [
            Locality(name=str(m["nome"]), region=uf, code=str(m["id"]))
            for m in rows or []
            if isinstance(m, dict) and "nome" in m and "id" in m
        ]
        self.cache.set(f"ibge|{uf}", localities)
        return localities
