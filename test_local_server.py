import flask
import psutil
import pytest

import local_server
from lan_address import NoPrivateAddressError


@pytest.fixture
def run_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(flask.Flask, "run", lambda self, **kwargs: calls.append(kwargs))
    return calls


@pytest.mark.parametrize("error", [
    NoPrivateAddressError("no private IP address found"),
    psutil.AccessDenied(),
    PermissionError("denied"),
])
def test_address_failure_exits_without_serving(monkeypatch, capsys, run_calls, error):
    def fail():
        raise error
    monkeypatch.setattr(local_server, "resolve_local_private_ipv4", fail)

    assert local_server.run_server() == 1
    assert run_calls == []
    assert capsys.readouterr().out.startswith("Error getting local IP address:")


def test_no_private_address_message(monkeypatch, capsys, run_calls):
    def fail():
        raise NoPrivateAddressError("no private IP address found")
    monkeypatch.setattr(local_server, "resolve_local_private_ipv4", fail)

    local_server.run_server()
    assert capsys.readouterr().out == "Error getting local IP address: no private IP address found\n"


def test_banner_and_listener(monkeypatch, capsys, run_calls):
    monkeypatch.setattr(local_server, "resolve_local_private_ipv4", lambda: "10.0.0.7")

    assert local_server.run_server() == 0
    out = capsys.readouterr().out
    assert "Server started at http://127.0.0.1 (local) and http://10.0.0.7 (LAN)" in out
    assert run_calls == [{"host": "0.0.0.0", "port": 80, "threaded": True}]


def test_main_exits_with_status(monkeypatch):
    monkeypatch.setattr(local_server, "run_server", lambda: 1)
    with pytest.raises(SystemExit) as exc_info:
        local_server.main()
    assert exc_info.value.code == 1
