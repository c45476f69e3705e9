"""Metric record model consumed by the enrichment stage."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

DYNAMIC_VALUE = "*"


class NamespaceElement(BaseModel):
    """One element of a metric namespace.

    Static elements carry only a ``value``. Dynamic elements also carry a
    ``name`` and a ``description``; their value is filled in at collection
    time.
    """

    value: str
    name: str = ""
    description: str = ""

    @property
    def is_dynamic(self) -> bool:
        return self.name != ""


class Metric(BaseModel):
    """A single measurement with a namespace and a mutable tag map.

    Attributes:
        namespace: Ordered path elements identifying the metric.
        tags: String tags; the enrichment stage adds entries here.
        data: The measured value.
        timestamp: Collection time, if known.
        unit: Unit of measurement.
        description: Free-form description.
    """

    namespace: list[NamespaceElement] = Field(default_factory=list)
    tags: dict[str, str] = Field(default_factory=dict)
    data: Any = None
    timestamp: Optional[datetime] = None
    unit: str = ""
    description: str = ""

    def namespace_strings(self) -> list[str]:
        """Namespace element values in order."""
        return [element.value for element in self.namespace]

    def namespace_key(self, separator: str = "/") -> str:
        return separator + separator.join(self.namespace_strings())


def new_namespace(*values: str) -> list[NamespaceElement]:
    """Build a namespace of static elements, one per value."""
    return [NamespaceElement(value=value) for value in values]


def dynamic_element(name: str, description: str = "") -> NamespaceElement:
    """Build a dynamic namespace element with a placeholder value."""
    return NamespaceElement(value=DYNAMIC_VALUE, name=name, description=description)
