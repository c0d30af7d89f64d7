"""AdapterRegistry: provider name -> adapter, with payload shape auto-detection."""

import logging
from collections.abc import Mapping

from swapclassifier.domain.enums import Provider
from swapclassifier.parser.adapters.base import AdapterError, BaseAdapter, NormalizedAdapter
from swapclassifier.parser.adapters.helius import HeliusAdapter
from swapclassifier.parser.adapters.rpc import SolanaRpcAdapter
from swapclassifier.parser.adapters.shyft import ShyftAdapter
from swapclassifier.parser.utils.types import NormalizedTransaction

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry mapping provider -> adapter.

    Detection tries adapters in registration order, so register the most
    specific shapes first.
    """

    def __init__(self) -> None:
        self._adapters: dict[str, BaseAdapter] = {}

    def register(self, adapter: BaseAdapter) -> None:
        self._adapters[adapter.PROVIDER.value] = adapter

    def get(self, provider: str | Provider) -> BaseAdapter:
        name = provider.value if isinstance(provider, Provider) else str(provider).lower()
        if name not in self._adapters:
            raise AdapterError(f"Unknown provider: {provider}")
        return self._adapters[name]

    def providers(self) -> list[str]:
        return list(self._adapters)

    def detect(self, payload: Mapping) -> BaseAdapter | None:
        """Return the first adapter whose shape check accepts the payload."""
        for adapter in self._adapters.values():
            if adapter.can_adapt(payload):
                return adapter
        return None

    def adapt(self, payload: object, provider: str | Provider | None = None) -> NormalizedTransaction:
        if not isinstance(payload, Mapping):
            raise AdapterError("Invalid transaction: expected an object")

        if provider is not None:
            adapter = self.get(provider)
        else:
            adapter = self.detect(payload)
            if adapter is None:
                raise AdapterError("Unrecognized transaction payload shape")
            logger.debug("Detected %s payload", adapter.PROVIDER.value)
        return adapter.adapt(payload)


def build_default_registry() -> AdapterRegistry:
    """Create an AdapterRegistry with every built-in adapter registered."""
    registry = AdapterRegistry()
    registry.register(NormalizedAdapter())
    registry.register(ShyftAdapter())
    registry.register(HeliusAdapter())
    registry.register(SolanaRpcAdapter())
    return registry
