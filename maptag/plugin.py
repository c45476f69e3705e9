"""Host adapter for the maptag processor.

Wraps :class:`~maptag.core.enricher.TagEnricher` in the callback shape a
metrics-collection host expects: ``process(metrics, cfg)`` returning the
metrics plus an error, and ``get_config_policy()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from .core.config import ConfigRule, MapTagConfig, config_policy
from .core.enricher import TagEnricher
from .core.exceptions import MapTagError
from .core.hooks import EnrichmentHooks
from .schemas.metric import Metric
from .utils.command import CommandRunner
from .utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ProcessResult:
    """Result from MapTagProcessor.process().

    Attributes:
        metrics: Enriched metrics, or the original ones on error.
        error: The batch-level error (``None`` on success).
    """

    metrics: list[Metric]
    error: Optional[MapTagError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MapTagProcessor:
    """Processor plugin: configuration is read on the first successful call."""

    def __init__(self,
                 runner: Optional[CommandRunner] = None,
                 hooks: Optional[EnrichmentHooks] = None):
        self._runner = runner
        self._hooks = hooks
        self.enricher: Optional[TagEnricher] = None

    def process(self, metrics: Sequence[Metric], cfg: Mapping[str, Any]) -> ProcessResult:
        """Enrich *metrics*; errors are returned, never raised."""
        try:
            if self.enricher is None:
                config = MapTagConfig.from_mapping(cfg)
                self.enricher = TagEnricher(config, runner=self._runner, hooks=self._hooks)
            return ProcessResult(metrics=self.enricher.process(metrics))
        except MapTagError as exc:
            logger.error(f"Processing {len(metrics)} metrics failed: {exc}")
            return ProcessResult(metrics=list(metrics), error=exc)

    def get_config_policy(self) -> tuple[ConfigRule, ...]:
        return config_policy()
