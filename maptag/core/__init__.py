"""
Core functionality for the maptag enrichment stage.
"""

from .addressing import AddressingMode, locate_key
from .config import CONFIG_POLICY, ConfigRule, MapTagConfig, config_policy
from .enricher import CacheState, TagEnricher
from .exceptions import (
    CommandExecutionError,
    ConfigurationError,
    MapTagError,
    PatternCompileError,
    UnknownAddressingModeError,
)
from .hooks import BatchCompleteEvent, EnrichmentHooks, RefreshEvent

__all__ = [
    'AddressingMode',
    'locate_key',
    'CONFIG_POLICY',
    'ConfigRule',
    'MapTagConfig',
    'config_policy',
    'CacheState',
    'TagEnricher',
    'MapTagError',
    'ConfigurationError',
    'CommandExecutionError',
    'PatternCompileError',
    'UnknownAddressingModeError',
    'EnrichmentHooks',
    'RefreshEvent',
    'BatchCompleteEvent',
]
