"""PSP Adapter Dispatcher - builds the adapter from process settings."""
from typing import Dict, Optional, Tuple

from easypay_client.config import EasyPayConfig, Settings, settings
from .adapter import PSPAdapter, PSPProvider
from .easypay_adapter import EasyPayAdapter


class PSPDispatcher:
    """
    Dispatcher that selects and initializes the correct PSP adapter.
    Configuration is read from settings and injected into the adapter;
    adapters are cached per (provider, configuration).
    """

    _adapters: Dict[Tuple[str, EasyPayConfig], PSPAdapter] = {}

    @classmethod
    def get_adapter(cls, provider: str, current: Optional[Settings] = None) -> PSPAdapter:
        """
        Get PSP adapter for the given provider.

        Args:
            provider: PSP provider name (easypay)
            current: Settings to build from (defaults to the process settings)

        Returns:
            Initialized PSP adapter

        Raises:
            ValueError: If provider is not supported
        """
        provider = provider.lower()
        if provider != PSPProvider.EASYPAY:
            raise ValueError(f"Unsupported PSP provider: {provider}")

        config = (current or settings).easypay_config()
        key = (provider, config)

        # Return cached adapter if exists
        if key not in cls._adapters:
            cls._adapters[key] = EasyPayAdapter(config)
        return cls._adapters[key]

    @classmethod
    def clear_cache(cls):
        """Clear cached adapters (useful for testing)."""
        cls._adapters = {}


# Convenience functions
def get_easypay_adapter() -> EasyPayAdapter:
    """Get EasyPay adapter."""
    return PSPDispatcher.get_adapter(PSPProvider.EASYPAY)
