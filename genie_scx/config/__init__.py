"""
Config Package

- conversion_config: INI overrides for the HD Edition -> WololoKingdoms remap tables
"""

from .conversion_config import ConversionConfig

__all__ = ['ConversionConfig']
