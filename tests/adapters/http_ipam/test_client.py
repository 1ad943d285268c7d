from __future__ import annotations

import json
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest
from aiolimiter import AsyncLimiter

from ipamkeeper.adapters.http_ipam import HttpIpamBackend, IpamApiError
from ipamkeeper.adapters.http_resilience import RateLimit, ResilienceConfig, ResilientClient
from ipamkeeper.config import IpamApiConfig
from ipamkeeper.domain.errors import IpamBackendError

BASE_URL = "https://ipam.example.test/api"


def _make_backend(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    ratelimit: RateLimit | None = None,
    limiters: list[AsyncLimiter | None] | None = None,
) -> HttpIpamBackend:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig, limiter: AsyncLimiter | None) -> ResilientClient:
        if limiters is not None:
            limiters.append(limiter)
        client = ResilientClient(resilience, limiter=limiter)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    config = IpamApiConfig(
        base_url=BASE_URL,
        resilience=ResilienceConfig(name="ipam-test", base_url=BASE_URL, ratelimit=ratelimit),
    )
    return HttpIpamBackend(config=config, client_factory=factory)


def test_assign_posts_name_and_returns_address() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"address": "10.0.0.5", "id": 17})

    backend = _make_backend(handler)

    assert backend.assign("prod-default-foo") == "10.0.0.5"
    assert seen[0].method == "POST"
    assert seen[0].url == httpx.URL(f"{BASE_URL}/addresses")
    assert json.loads(seen[0].content) == {"name": "prod-default-foo"}


def test_unassign_deletes_quoted_address() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    _make_backend(handler).unassign("fd00::5")

    assert seen[0].method == "DELETE"
    assert seen[0].url.path == "/api/addresses/fd00::5"


def test_search_sends_exact_flag() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"addresses": ["10.0.0.1", "10.0.0.2"]})

    result = _make_backend(handler).search("host=x", exact=True)

    assert list(result) == ["10.0.0.1", "10.0.0.2"]
    assert seen[0].url.params["query"] == "host=x"
    assert seen[0].url.params["exact"] == "true"


def test_error_status_becomes_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"message": "pool exhausted"})

    with pytest.raises(IpamApiError) as excinfo:
        _make_backend(handler).assign("foo")

    assert excinfo.value.status_code == 409
    assert "pool exhausted" in str(excinfo.value)


def test_malformed_payload_is_a_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"address": "not-an-ip"})

    with pytest.raises(IpamBackendError, match="unexpected IPAM response payload"):
        _make_backend(handler).assign("foo")


def test_transport_failure_is_a_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(IpamBackendError, match="connection refused"):
        _make_backend(handler).search("host=x", exact=True)


def test_calls_share_one_rate_limiter() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"addresses": ["10.0.0.1"]})

    limiters: list[AsyncLimiter | None] = []
    backend = _make_backend(
        handler, ratelimit=RateLimit(max_calls=5, per_seconds=60.0), limiters=limiters
    )

    backend.search("host=x", exact=True)
    backend.search("host=y", exact=True)

    assert backend.limiter is not None
    assert backend.limiter.max_rate == 5
    assert limiters == [backend.limiter, backend.limiter]


def test_backend_without_rate_limit_has_no_limiter() -> None:
    backend = _make_backend(lambda request: httpx.Response(204))

    backend.unassign("10.0.0.5")

    assert backend.limiter is None
