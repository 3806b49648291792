"""Domain port definitions for adapters."""

from __future__ import annotations

from .caching import AttributeCache
from .directory import AttributeSource

__all__ = ["AttributeCache", "AttributeSource"]
