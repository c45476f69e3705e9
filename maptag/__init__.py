"""
maptag - metric tag enrichment

Adds tags to metrics by joining a tag or namespace value against a lookup
table parsed from an external command's output.
"""

from .core import (
    AddressingMode,
    CacheState,
    CommandExecutionError,
    ConfigurationError,
    EnrichmentHooks,
    MapTagConfig,
    MapTagError,
    PatternCompileError,
    TagEnricher,
    UnknownAddressingModeError,
)
from .data import TagMapping, build_mapping
from .plugin import MapTagProcessor, ProcessResult
from .schemas import Metric, NamespaceElement, dynamic_element, new_namespace

__version__ = "0.1.0"

__all__ = [
    'TagEnricher',
    'MapTagProcessor',
    'ProcessResult',
    'MapTagConfig',
    'AddressingMode',
    'CacheState',
    'EnrichmentHooks',
    'TagMapping',
    'build_mapping',
    'Metric',
    'NamespaceElement',
    'new_namespace',
    'dynamic_element',
    'MapTagError',
    'ConfigurationError',
    'CommandExecutionError',
    'PatternCompileError',
    'UnknownAddressingModeError',
]
