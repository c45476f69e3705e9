"""Lookup-table construction."""

from .mapping import TagMapping, build_mapping, compile_pattern

__all__ = ['TagMapping', 'build_mapping', 'compile_pattern']
