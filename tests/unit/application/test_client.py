import pytest

from flywheel import RequestContext, resolve_client_address, scoped_context
from flywheel.application.client import CLIENT_ADDRESS_KEYS


def test_returns_unknown_without_signals():
    assert resolve_client_address({}) == "UNKNOWN"


def test_highest_priority_signal_wins():
    environ = {key: f"10.0.0.{index}" for index, key in enumerate(CLIENT_ADDRESS_KEYS)}

    assert resolve_client_address(environ) == "10.0.0.0"
    assert environ["HTTP_CLIENT_IP"] == "10.0.0.0"


@pytest.mark.parametrize("position", range(len(CLIENT_ADDRESS_KEYS)))
def test_each_signal_is_probed_in_order(position):
    environ = {key: f"198.51.100.{index}" for index, key in enumerate(CLIENT_ADDRESS_KEYS)}
    for key in CLIENT_ADDRESS_KEYS[:position]:
        del environ[key]

    assert resolve_client_address(environ) == f"198.51.100.{position}"


def test_empty_values_are_skipped():
    environ = {"HTTP_CLIENT_IP": "", "HTTP_X_FORWARDED_FOR": "", "REMOTE_ADDR": "192.0.2.7"}

    assert resolve_client_address(environ) == "192.0.2.7"


def test_values_are_returned_verbatim():
    environ = {"HTTP_X_FORWARDED_FOR": "203.0.113.1, 10.0.0.1"}

    assert resolve_client_address(environ) == "203.0.113.1, 10.0.0.1"


def test_defaults_to_current_request_context():
    with scoped_context(RequestContext.create({"REMOTE_ADDR": "192.0.2.44"})):
        assert resolve_client_address() == "192.0.2.44"


def test_falls_back_to_process_environment(monkeypatch):
    for key in CLIENT_ADDRESS_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("REMOTE_ADDR", "127.0.0.9")

    assert resolve_client_address() == "127.0.0.9"
