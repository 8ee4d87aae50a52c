from fastapi import APIRouter

from config import get_settings
from core.gateway_factory_registry import GatewayFactoryRegistry
from core.register_gateways import register_gateways
from services.emissions.emissions_factory import default_factors

router = APIRouter(prefix="/status", tags=["status"])


@router.get("/gateways")
def gateways():
    register_gateways()  # idempotent
    default = get_settings().GEOCODING_GATEWAY
    return {
        "gateways": GatewayFactoryRegistry.names(),
        "default": default,
        "details": GatewayFactoryRegistry.describe(default),
    }


@router.get("/factors")
def factors():
    table = default_factors()
    return {
        "preset": table.name,
        "default_factor": table.default_factor,
        "factors": table.entries(),
    }
