from __future__ import annotations

import pytest

from ipamkeeper.domain.errors import AllocationError
from ipamkeeper.domain.model import IpAddress, IpAddressKey
from ipamkeeper.ui import cli as cli_module


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "load_dotenv", lambda: False)


def test_add_passes_spec_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_add(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli_module, "add_ip_address", fake_add)

    cli_module.main(["add", "foo", "--namespace", "team-a", "--ref", "host=x"])

    assert captured == {
        "namespace": "team-a",
        "name": "foo",
        "display_name": None,
        "ref": "host=x",
    }


def test_reconcile_defaults_to_default_namespace(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli_module, "reconcile_ip_address", fake_reconcile)

    cli_module.main(["reconcile", "foo"])

    assert captured == {"namespace": "default", "name": "foo"}


def test_show_logs_status(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    def fake_get(**kwargs: object) -> IpAddress:
        return IpAddress(namespace="default", name="foo")

    monkeypatch.setattr(cli_module, "get_ip_address", fake_get)

    with caplog.at_level("INFO"):
        cli_module.main(["show", "foo"])

    assert "default-foo: address=-" in caplog.text


def test_failed_command_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_delete(**kwargs: object) -> None:
        raise AllocationError("backend down", key=IpAddressKey("default", "foo"))

    monkeypatch.setattr(cli_module, "delete_ip_address", fake_delete)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["delete", "foo"])

    assert excinfo.value.code == 1


def test_blank_display_name_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["add", "foo", "--display-name", "  "])

    assert excinfo.value.code == 2


def test_unknown_command_is_rejected() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["frobnicate"])

    assert excinfo.value.code == 2
