# core/register_gateways.py
from __future__ import annotations
import logging

from core.gateway_factory_registry import OFFLINE, ONLINE, GatewayFactoryRegistry
from core.cache import TTLCache

# Offline gateways
from adapters.offline.static_gateway import StaticGeocodingGateway

# Online gateways
from adapters.online.viacep_gateway import ViaCepGeocodingGateway

logger = logging.getLogger(__name__)

_registered = False


def register_gateways() -> None:
    global _registered
    if _registered:
        return

    from config import get_settings

    settings_obj = get_settings()

    GatewayFactoryRegistry.register(
        "static",
        lambda: StaticGeocodingGateway(),
        kind=OFFLINE,
        description="Bundled distance tables; no postal-code lookup",
    )

    # One cache shared by every ViaCEP gateway instance
    postal_cache = TTLCache(ttl_seconds=settings_obj.POSTAL_CODE_CACHE_TTL_S)
    GatewayFactoryRegistry.register(
        "viacep",
        lambda: ViaCepGeocodingGateway(
            base_url=settings_obj.VIACEP_BASE_URL,
            timeout_s=settings_obj.HTTP_TIMEOUT_S,
            cache=postal_cache,
        ),
        kind=ONLINE,
        description="Brazilian postal codes via ViaCEP, bundled distance tables",
    )

    logger.debug("Registered gateways: %s", GatewayFactoryRegistry.names())
    _registered = True
