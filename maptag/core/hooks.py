"""Lifecycle hooks for enrichment observability.

Typed event dataclasses + ``EnrichmentHooks`` container.  Hook callables
are optional; ``_fire_hook`` catches and logs their errors so a broken
hook never fails a batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..utils.logger import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Event dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RefreshEvent:
    """Fired after a new lookup table has been installed."""

    num_rows: int
    groups: list[str]
    elapsed_seconds: float


@dataclass(frozen=True)
class BatchCompleteEvent:
    """Fired after every metric of a batch has been processed."""

    num_metrics: int
    num_enriched: int
    refreshed: bool


# ---------------------------------------------------------------------------
# EnrichmentHooks container
# ---------------------------------------------------------------------------


@dataclass
class EnrichmentHooks:
    """User-facing hook container. Pass to ``TagEnricher``."""

    on_refresh: Optional[Callable[[RefreshEvent], Any]] = None
    on_batch_complete: Optional[Callable[[BatchCompleteEvent], Any]] = None


def _fire_hook(hook: Optional[Callable], event: Any) -> None:
    """Call *hook* with *event*.  Errors are logged, never raised."""
    if hook is None:
        return
    try:
        hook(event)
    except Exception:
        logger.warning("Hook %s raised an exception", hook, exc_info=True)
