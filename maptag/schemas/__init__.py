"""Record schemas."""

from .metric import Metric, NamespaceElement, dynamic_element, new_namespace

__all__ = ['Metric', 'NamespaceElement', 'dynamic_element', 'new_namespace']
