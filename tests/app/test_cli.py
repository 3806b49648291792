from __future__ import annotations

import json

import pytest

from attrcache.ui import cli


def test_resolve_passes_attributes_and_strategy(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_resolve(
        principal_id: str, attributes: dict[str, object], **kwargs: object
    ) -> dict[str, object]:
        captured.update(principal_id=principal_id, attributes=attributes, **kwargs)
        return {"email": "a@x"}

    monkeypatch.setattr(cli, "resolve_principal_attributes", fake_resolve)

    cli.main(
        [
            "resolve",
            "ann",
            "-a",
            "email=a@x",
            "-a",
            "role=user",
            "-a",
            "role=admin",
            "--strategy",
            "multivalued",
        ]
    )

    assert captured["principal_id"] == "ann"
    assert captured["attributes"] == {"email": "a@x", "role": ["user", "admin"]}
    repository = captured["repository"]
    assert getattr(repository, "merging_strategy", None) == "MULTIVALUED"
    assert json.loads(capsys.readouterr().out) == {"email": "a@x"}


def test_person_add_then_resolve(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["person", "add", "ann", "-a", "email=a@x", "-a", "dept=eng"])
    cli.main(["resolve", "ann", "-a", "email=old@x", "--strategy", "add"])

    assert json.loads(capsys.readouterr().out) == {"email": "old@x", "dept": "eng"}


def test_cache_purge(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[bool] = []

    def fake_purge() -> int:
        calls.append(True)
        return 3

    monkeypatch.setattr(cli, "purge_expired_cache_entries", fake_purge)

    cli.main(["cache", "purge"])

    assert calls == [True]


@pytest.mark.parametrize(
    "argv",
    [
        ["resolve", "ann", "-a", "missing-separator"],
        ["resolve", "ann", "--strategy", "overwrite"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)

    assert excinfo.value.code == 2


def test_configuration_errors_exit_with_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ATTRCACHE_CACHE_EXPIRATION", "never")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["resolve", "ann"])

    assert excinfo.value.code == 2


def test_unexpected_failures_exit_with_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def explode(*_: object, **__: object) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "purge_expired_cache_entries", explode)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["cache", "purge"])

    assert excinfo.value.code == 1
