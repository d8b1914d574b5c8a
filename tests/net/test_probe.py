"""Tests for endpoint parsing and batch probing."""
from __future__ import annotations

import pytest

from loopback_shim.domain.redirect_policy import RedirectPolicy
from loopback_shim.net.probe import parse_endpoint, probe_endpoint, probe_endpoints
from loopback_shim.net.providers import PlainSocketProvider
from loopback_shim.net.redirecting import RedirectingSocketFactory


@pytest.mark.parametrize(
    "text, expected",
    [
        ("127.0.0.1:1099", ("127.0.0.1", 1099)),
        ("registry.local:9010", ("registry.local", 9010)),
        ("[::1]:1099", ("::1", 1099)),
    ],
)
def test_parse_endpoint(text, expected):
    assert parse_endpoint(text) == expected


@pytest.mark.parametrize("text", ["1099", ":1099", "host:", "host:abc", "host:0", "host:70000"])
def test_parse_endpoint_rejects(text):
    with pytest.raises(ValueError):
        parse_endpoint(text)


def test_probe_closes_socket(recording_provider):
    result = probe_endpoint(recording_provider, "10.0.0.5", 1099)
    assert result.ok is True
    assert result.error is None
    assert recording_provider.calls == [("create_socket", "10.0.0.5", 1099)]
    assert recording_provider.returned[0].closed is True


def test_probe_reports_failure(recording_provider):
    recording_provider.fail_with = ConnectionRefusedError(111, "Connection refused")
    result = probe_endpoint(recording_provider, "10.0.0.5", 1099)
    assert result.ok is False
    assert "refused" in result.error


def test_probe_batch_through_shim(tcp_listener, notices):
    """Ten advertised loopback-ish hosts, all forced back to the target, one notice."""
    factory = RedirectingSocketFactory(
        PlainSocketProvider(timeout=2.0),
        RedirectPolicy("127.0.0.1"),
        notice=notices.append,
    )
    endpoints = [(f"node{i}.invalid", tcp_listener) for i in range(10)]

    results = probe_endpoints(factory, endpoints, workers=4)

    assert [r.advertised_host for r in results] == [h for h, _ in endpoints]
    assert all(r.ok for r in results)
    assert all(r.effective_host == "127.0.0.1" for r in results)
    assert len(notices) == 3


def test_probe_batch_mixed_outcomes(tcp_listener, closed_port):
    provider = PlainSocketProvider(timeout=2.0)
    results = probe_endpoints(
        provider,
        [("127.0.0.1", tcp_listener), ("127.0.0.1", closed_port)],
        workers=2,
    )
    assert [r.ok for r in results] == [True, False]
    assert results[1].effective_host == "127.0.0.1"


def test_probe_reports_followed_host(recording_provider):
    factory = RedirectingSocketFactory(
        recording_provider,
        RedirectPolicy("10.0.0.5", follow_redirect=True),
        notice=lambda line: None,
    )
    result = probe_endpoint(factory, "192.168.1.1", 443)
    assert result.effective_host == "192.168.1.1"
    assert recording_provider.calls == [("create_socket", "192.168.1.1", 443)]


def test_probe_reported_host_does_not_consume_notice(recording_provider, notices):
    policy = RedirectPolicy("10.0.0.5")
    factory = RedirectingSocketFactory(recording_provider, policy, notice=notices.append)
    result = probe_endpoint(factory, "127.0.0.1", 1099)
    assert result.effective_host == "10.0.0.5"
    assert len(notices) == 3
