"""Merging strategy configuration."""

from __future__ import annotations

from attrcache.domain.errors import UnknownMergeStrategyError
from attrcache.domain.merging import MergingStrategy

from .env import optional_env_var
from .errors import ConfigurationError


def parse_merging_strategy(name: str | None) -> MergingStrategy | None:
    """Return the strategy named ``name``; ``None`` or blank means no merging."""

    if name is None or not name.strip():
        return None
    try:
        return MergingStrategy.parse(name)
    except UnknownMergeStrategyError as exc:
        choices = ", ".join(strategy.value for strategy in MergingStrategy)
        raise ConfigurationError(f"{exc.args[0]} (expected one of: {choices})") from exc


def get_merging_strategy() -> MergingStrategy | None:
    return parse_merging_strategy(optional_env_var("ATTRCACHE_MERGING_STRATEGY"))
