# core/gateway_factory_registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from core.interfaces import GeocodingGateway

OFFLINE = "offline"  # answers from bundled tables only
ONLINE = "online"  # calls a postal-code web service


def _key(name: str) -> str:
    return name.lower().strip()


@dataclass(frozen=True)
class GatewayEntry:
    name: str
    kind: str
    factory: Callable[[], GeocodingGateway]
    description: str = ""

    def describe(self, default: Optional[str] = None) -> dict:
        return {
            "name": self.name,
            "kind": self.kind,
            "description": self.description,
            "default": default is not None and _key(default) == self.name,
        }


class GatewayFactoryRegistry:
    """
    Named geocoding gateways. The first registration of a name wins, so
    registering at app startup and again lazily on first use is harmless.
    """

    _entries: Dict[str, GatewayEntry] = {}

    @classmethod
    def register(
        cls,
        name: str,
        factory: Callable[[], GeocodingGateway],
        kind: str = OFFLINE,
        description: str = "",
    ) -> GatewayEntry:
        if kind not in (OFFLINE, ONLINE):
            raise ValueError(f"Unknown gateway kind '{kind}' for '{name}'.")
        key = _key(name)
        entry = cls._entries.get(key)
        if entry is None:
            entry = GatewayEntry(name=key, kind=kind, factory=factory, description=description)
            cls._entries[key] = entry
        return entry

    @classmethod
    def create(cls, name: str) -> GeocodingGateway:
        entry = cls._entries.get(_key(name))
        if entry is None:
            known = ", ".join(cls.names()) or "none"
            raise ValueError(f"Gateway '{name}' is not registered (available: {known}).")
        return entry.factory()

    @classmethod
    def names(cls) -> List[str]:
        return sorted(cls._entries)

    @classmethod
    def describe(cls, default: Optional[str] = None) -> List[dict]:
        return [cls._entries[n].describe(default) for n in cls.names()]
