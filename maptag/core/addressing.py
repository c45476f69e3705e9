"""Join-key location on a metric.

Three addressing modes decide where the lookup value comes from:

- ``tag``: the value of the tag named ``reference_name``.
- ``ns_name``: the value of the namespace element named ``reference_name``
  (the last such element wins).
- ``ns_value``: ``reference_name`` itself, provided some namespace element
  has exactly that value.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..schemas.metric import Metric
from .exceptions import UnknownAddressingModeError


class AddressingMode(str, Enum):
    TAG = "tag"
    NS_NAME = "ns_name"
    NS_VALUE = "ns_value"

    @classmethod
    def parse(cls, value: str | AddressingMode) -> AddressingMode:
        """Resolve a configured mode string.

        Raises:
            UnknownAddressingModeError: If *value* is not a supported mode.
        """
        try:
            return cls(value)
        except ValueError:
            raise UnknownAddressingModeError(str(value)) from None


def locate_key(metric: Metric, mode: AddressingMode, reference_name: str) -> Optional[str]:
    """Return the join key for *metric*, or ``None`` when it has none."""
    if mode is AddressingMode.TAG:
        return metric.tags.get(reference_name)

    if mode is AddressingMode.NS_NAME:
        key = None
        for element in metric.namespace:
            if element.name == reference_name:
                key = element.value
        return key

    if mode is AddressingMode.NS_VALUE:
        values = metric.namespace_strings()
        if reference_name in values:
            return metric.namespace[values.index(reference_name)].value
        return None

    raise UnknownAddressingModeError(str(mode))
