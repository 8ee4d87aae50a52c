# services/calculator_factory.py
from typing import Optional

from adapters.gateway_factory import create_gateway, default_gateway
from core.interfaces import GeocodingGateway
from services.distance_resolver import DistanceResolver
from services.emissions.calculator import EmissionCalculator
from services.emissions.emissions_factory import default_factors


def get_calculator(
    gateway: Optional[GeocodingGateway] = None, gateway_name: Optional[str] = None
) -> EmissionCalculator:
    """Wire resolver + factors the way the app is configured."""
    from config import get_settings

    if gateway is None:
        gateway = create_gateway(gateway_name) if gateway_name else default_gateway()
    resolver = DistanceResolver(gateway, home_country=get_settings().HOME_COUNTRY)
    return EmissionCalculator(resolver, factors=default_factors())
