from __future__ import annotations

import pytest

from attrcache.domain.errors import UnknownMergeStrategyError
from attrcache.domain.merging import (
    AttributeMerger,
    MergingStrategy,
    MultivaluedAttributeMerger,
    NoncollidingAttributeMerger,
    ReplacingAttributeMerger,
    SourceAttributeMerger,
    merger_for,
)


def test_replace_prefers_source_values() -> None:
    merged = ReplacingAttributeMerger().merge(
        {"email": ["a@x"], "cn": ["Ann"]},
        {"email": ["b@x"], "dept": ["eng"]},
    )

    assert dict(merged) == {"cn": ["Ann"], "dept": ["eng"], "email": ["b@x"]}


def test_add_only_fills_missing_attributes() -> None:
    merged = NoncollidingAttributeMerger().merge(
        {"email": ["a@x"]},
        {"email": ["b@x"], "dept": ["eng"]},
    )

    assert dict(merged) == {"dept": ["eng"], "email": ["a@x"]}


def test_none_returns_source_attributes() -> None:
    merged = SourceAttributeMerger().merge({"email": ["a@x"]}, {"dept": ["eng"]})

    assert dict(merged) == {"dept": ["eng"]}


def test_multivalued_combines_and_deduplicates_values() -> None:
    merged = MultivaluedAttributeMerger().merge(
        {"role": ["user"], "cn": ["Ann"]},
        {"role": ["admin", "user"], "dept": ["eng"]},
    )

    assert dict(merged) == {"cn": ["Ann"], "dept": ["eng"], "role": ["user", "admin"]}


def test_mergers_match_attribute_names_case_insensitively() -> None:
    merged = NoncollidingAttributeMerger().merge({"Email": ["a@x"]}, {"email": ["b@x"]})

    assert dict(merged) == {"Email": ["a@x"]}


@pytest.mark.parametrize("strategy", list(MergingStrategy))
def test_mergers_do_not_mutate_inputs(strategy: MergingStrategy) -> None:
    existing = {"role": ["user"]}
    incoming = {"role": ["admin"], "dept": ["eng"]}

    merged = merger_for(strategy).merge(existing, incoming)
    merged.setdefault("role", []).append("auditor")

    assert existing == {"role": ["user"]}
    assert incoming == {"role": ["admin"], "dept": ["eng"]}


def test_merger_for_covers_every_strategy() -> None:
    expected = {
        MergingStrategy.REPLACE: ReplacingAttributeMerger,
        MergingStrategy.ADD: NoncollidingAttributeMerger,
        MergingStrategy.NONE: SourceAttributeMerger,
        MergingStrategy.MULTIVALUED: MultivaluedAttributeMerger,
    }

    for strategy, merger_cls in expected.items():
        merger = strategy.attribute_merger
        assert isinstance(merger, merger_cls)
        assert isinstance(merger, AttributeMerger)


def test_merger_for_accepts_names() -> None:
    assert isinstance(merger_for("multivalued"), MultivaluedAttributeMerger)


def test_parse_is_case_insensitive() -> None:
    assert MergingStrategy.parse(" replace ") is MergingStrategy.REPLACE


def test_unknown_strategy_is_a_lookup_error() -> None:
    with pytest.raises(UnknownMergeStrategyError) as exc:
        merger_for("OVERWRITE")

    assert isinstance(exc.value, LookupError)
    assert exc.value.name == "OVERWRITE"
