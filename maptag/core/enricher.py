"""
Enrichment engine for the maptag stage.

``TagEnricher`` owns the cached lookup table. Each ``process()`` call
checks whether the table is older than the configured TTL, rebuilds it
from the external command when it is, then tags every metric of the
batch from the cached table.

The engine has no internal lock. Hosts that call it from several threads
must serialise calls on the same instance.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Optional, Sequence

from ..data.mapping import TagMapping, build_mapping, compile_pattern
from ..schemas.metric import Metric
from ..utils.command import CommandRunner, run_command
from ..utils.logger import get_logger
from .addressing import AddressingMode, locate_key
from .config import MapTagConfig
from .hooks import BatchCompleteEvent, EnrichmentHooks, RefreshEvent, _fire_hook

logger = get_logger(__name__)


class CacheState(str, Enum):
    STALE = "stale"
    FRESH = "fresh"


class TagEnricher:
    """
    Adds tags to metrics by joining them against a command-built table.

    The table is rebuilt lazily: on the first ``process()`` call and on
    the first call after the TTL has elapsed. A failed rebuild leaves the
    previous table and refresh time in place, so the next call retries.
    """

    def __init__(self,
                 config: MapTagConfig,
                 runner: Optional[CommandRunner] = None,
                 hooks: Optional[EnrichmentHooks] = None):
        """
        Initialize the TagEnricher.

        Args:
            config: Validated configuration.
            runner: ``(command, args) -> stdout`` callable. Defaults to
                :func:`~maptag.utils.command.run_command`.
            hooks: Optional lifecycle hooks.
        """
        self.config = config
        self.runner = runner or run_command
        self.hooks = hooks or EnrichmentHooks()

        self._mapping = TagMapping.empty()
        self._refreshed_at: Optional[float] = None

        logger.info(
            f"TagEnricher initialized: command={config.command!r}, "
            f"mode={config.addressing_mode!r}, ttl={config.ttl_minutes}m"
        )

    # -- cache state -----------------------------------------------------

    @property
    def mapping(self) -> TagMapping:
        """The lookup table currently in use."""
        return self._mapping

    @property
    def refreshed_at(self) -> Optional[float]:
        """Monotonic time of the last successful refresh (``None`` if never)."""
        return self._refreshed_at

    @property
    def age(self) -> Optional[float]:
        """Seconds since the last successful refresh."""
        if self._refreshed_at is None:
            return None
        return time.monotonic() - self._refreshed_at

    @property
    def state(self) -> CacheState:
        age = self.age
        if age is None or age >= self.config.ttl.total_seconds():
            return CacheState.STALE
        return CacheState.FRESH

    def invalidate(self) -> None:
        """Mark the table stale so the next ``process()`` rebuilds it."""
        self._refreshed_at = None

    def replace_mapping(self, mapping: TagMapping) -> None:
        """Swap in *mapping* without changing the refresh time."""
        self._mapping = mapping

    # -- operations ------------------------------------------------------

    def refresh(self) -> TagMapping:
        """
        Rebuild the lookup table from the external command.

        Returns:
            The newly installed mapping.

        Raises:
            PatternCompileError: If the configured pattern is invalid.
            CommandExecutionError: If the command fails.
        """
        start = time.monotonic()
        regex = compile_pattern(self.config.pattern)
        output = self.runner(self.config.command, list(self.config.args))
        mapping = build_mapping(output, regex)

        self._mapping, self._refreshed_at = mapping, time.monotonic()

        elapsed = self._refreshed_at - start
        logger.info(
            f"Lookup table refreshed: {len(mapping)} rows, "
            f"groups={mapping.groups} in {elapsed:.2f}s"
        )
        if self.config.reference_group not in mapping:
            logger.warning(
                f"Reference group '{self.config.reference_group}' has no values; "
                f"no metrics will be enriched"
            )
        _fire_hook(
            self.hooks.on_refresh,
            RefreshEvent(num_rows=len(mapping), groups=mapping.groups, elapsed_seconds=elapsed),
        )
        return mapping

    def process(self, metrics: Sequence[Metric]) -> list[Metric]:
        """
        Enrich *metrics* in place from the cached lookup table.

        Args:
            metrics: The batch to enrich.

        Returns:
            The same metric objects, as a list.

        Raises:
            UnknownAddressingModeError: If the configured mode is unsupported.
            PatternCompileError: If a needed refresh fails on the pattern.
            CommandExecutionError: If a needed refresh fails on the command.
        """
        mode = self.config.mode

        refreshed = False
        if self.state is CacheState.STALE:
            try:
                self.refresh()
            except Exception as exc:
                logger.warning(f"Lookup table refresh failed, batch aborted: {exc}")
                raise
            refreshed = True
        else:
            logger.debug(f"Using cached lookup table ({len(self._mapping)} rows)")

        mapping = self._mapping
        enriched = 0
        for idx, metric in enumerate(metrics):
            if self._enrich_metric(metric, mapping, mode):
                enriched += 1
            elif logger.isEnabledFor(logging.DEBUG):
                logger.debug("No lookup match for metric %d (%s)", idx, metric.namespace_key())

        _fire_hook(
            self.hooks.on_batch_complete,
            BatchCompleteEvent(num_metrics=len(metrics), num_enriched=enriched, refreshed=refreshed),
        )
        return list(metrics)

    def _enrich_metric(self, metric: Metric, mapping: TagMapping, mode: AddressingMode) -> bool:
        key = locate_key(metric, mode, self.config.reference_name)
        if key is None:
            return False

        index = mapping.index_of(self.config.reference_group, key)
        if index < 0:
            return False

        metric.tags.update(mapping.row(index, exclude=[self.config.reference_group]))
        return True

    def __repr__(self) -> str:
        return (
            f"TagEnricher(command={self.config.command!r}, "
            f"state={self.state.value}, rows={len(self._mapping)})"
        )
