# core/load_plugins.py
import logging

logger = logging.getLogger(__name__)


def load_plugins():
    # Gateways
    from core.register_gateways import register_gateways

    register_gateways()

    from core.gateway_factory_registry import GatewayFactoryRegistry

    logger.info("Geocoding gateways: %s", GatewayFactoryRegistry.names())
