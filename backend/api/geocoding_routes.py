# api/geocoding_routes.py
from typing import List

from fastapi import APIRouter, HTTPException

from adapters.gateway_factory import default_gateway
from adapters.online.ibge_localities import IbgeLocalityDirectory
from core.exceptions import GeocodingError
from models.trip import Locality, PostalAddress

router = APIRouter(prefix="/geocoding", tags=["geocoding"])


@router.get("/postal-codes/{code}", response_model=PostalAddress)
async def resolve_postal_code(code: str):
    gateway = default_gateway()
    try:
        address = await gateway.resolve_postal_code(code)
    except GeocodingError as e:
        raise HTTPException(status_code=502, detail=str(e))
    if address is None:
        raise HTTPException(status_code=404, detail=f"Postal code {code!r} not found")
    return address


@router.get("/regions/{region}/localities", response_model=List[Locality])
async def list_localities(region: str):
    from config import get_settings

    s = get_settings()
    directory = IbgeLocalityDirectory(base_url=s.IBGE_BASE_URL, timeout_s=s.HTTP_TIMEOUT_S)
    return await directory.list_localities(region)
