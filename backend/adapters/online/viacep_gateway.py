import logging
from typing import Optional

import httpx

from adapters.offline.distance_tables import DistanceTables
from adapters.offline.static_gateway import StaticGeocodingGateway, normalize_postal_code
from core.cache import TTLCache
from core.exceptions import GeocodingError
from models.trip import PostalAddress

logger = logging.getLogger(__name__)


class ViaCepGeocodingGateway(StaticGeocodingGateway):
    """
    Resolves Brazilian CEPs through ViaCEP (https://viacep.com.br).
    Distance lookups stay on the static tables inherited from the offline gateway.

    resolve_postal_code returns None for malformed or unknown codes and raises
    GeocodingError when the service itself fails; callers decide how to degrade.
    """

    def __init__(
        self,
        base_url: str = "https://viacep.com.br/ws",
        timeout_s: float = 10.0,
        cache: Optional[TTLCache] = None,
        tables: Optional[DistanceTables] = None,
    ):
        super().__init__(tables=tables)
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.cache = cache if cache is not None else TTLCache(ttl_seconds=3600)

    async def resolve_postal_code(self, code: str) -> Optional[PostalAddress]:
        cep = normalize_postal_code(code)
        if len(cep) != 8:
            return None
        return await self.cache.aget_or_set(f"viacep|{cep}", lambda: self._fetch(cep))

    async def _fetch(self, cep: str) -> Optional[PostalAddress]:
        url = f"{self.base_url}/{cep}/json/"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                resp = await client.get(url)
                # ViaCEP answers 400 for syntactically invalid codes
                if resp.status_code == 400:
                    return None
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            raise GeocodingError(f"ViaCEP HTTP error: {e.response.status_code}")
        except (httpx.HTTPError, ValueError) as e:
            raise GeocodingError(f"ViaCEP error: {e}")

        # unknown CEPs come back 200 with {"erro": true} (bool or "true")
        if not isinstance(data, dict) or str(data.get("erro", "")).lower() == "true":
            return None

        locality = (data.get("localidade") or "").strip()
        region = (data.get("uf") or "").strip().upper()
        if not locality or not region:
            logger.warning("ViaCEP answered without locality/uf for %s", cep)
            return None
        return PostalAddress(locality=locality, region=region, postal_code=cep)
