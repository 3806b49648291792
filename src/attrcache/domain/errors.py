"""Domain error definitions."""

from __future__ import annotations


class UnknownMergeStrategyError(LookupError):
    """Raised when no attribute merger is registered for a strategy name."""

    def __init__(self, name: object) -> None:
        super().__init__(f"Unknown merging strategy: {name!r}")
        self.name = name


class AttributeSourceUnavailableError(RuntimeError):
    """Raised by attribute sources that cannot be reached or are not configured."""


class InvalidCachePolicyError(ValueError):
    """Raised when a cache expiration or time unit cannot be used."""
