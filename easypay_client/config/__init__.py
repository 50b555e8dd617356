# Configuration package
"""
Configuration package for the EasyPay client
Exports settings from settings.py for easy import
"""
from .settings import EasyPayConfig, Settings, normalize_gateway, settings

__all__ = ["settings", "Settings", "EasyPayConfig", "normalize_gateway"]
