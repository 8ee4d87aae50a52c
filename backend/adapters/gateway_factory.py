# adapters/gateway_factory.py
from core.gateway_factory_registry import GatewayFactoryRegistry
from core.interfaces import GeocodingGateway


def create_gateway(name: str) -> GeocodingGateway:
    # Lazy init in case app lifespan didn't run
    from core.register_gateways import register_gateways

    register_gateways()
    return GatewayFactoryRegistry.create(name)


def default_gateway() -> GeocodingGateway:
    """The gateway named by GEOCODING_GATEWAY."""
    from config import get_settings

    return create_gateway(get_settings().GEOCODING_GATEWAY)
