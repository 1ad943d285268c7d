"""HTTP client for a REST IPAM service."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ipamkeeper.adapters.http_resilience import ResilientClient, build_limiter
from ipamkeeper.config import IpamApiConfig, get_ipam_api_config
from ipamkeeper.domain.errors import IpamBackendError

from .schema import AssignRequest, AssignResponse, ErrorResponse, SearchResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from aiolimiter import AsyncLimiter

    from ipamkeeper.config import ResilienceConfig
    from ipamkeeper.domain.ports import IpamBackend

log = getLogger(__name__)


def _default_client_factory(
    config: ResilienceConfig, limiter: AsyncLimiter | None
) -> ResilientClient:
    return ResilientClient(config, limiter=limiter)


class IpamApiError(IpamBackendError):
    """Raised when the IPAM service answers with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class HttpIpamBackend:
    """IPAM backend speaking to ``/addresses`` on a REST service.

    Each call runs its own event loop, so the backend is only usable from
    synchronous code such as the reconciler. Clients are created per call,
    but all of them draw from the one rate limiter owned by the backend.
    """

    config: IpamApiConfig = field(default_factory=get_ipam_api_config)
    client_factory: Callable[[ResilienceConfig, AsyncLimiter | None], ResilientClient] = field(
        default=_default_client_factory
    )
    limiter: AsyncLimiter | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.limiter = build_limiter(self.config.resilience.ratelimit)

    def assign(self, key: str) -> str:
        response = asyncio.run(
            self._call("POST", "/addresses", json=AssignRequest(name=key).model_dump())
        )
        payload = self._parse(AssignResponse, response)
        log.debug("IPAM assigned %s for %r", payload.address, key)
        return payload.address

    def unassign(self, address: str) -> None:
        asyncio.run(self._call("DELETE", f"/addresses/{quote(address, safe='')}"))

    def search(self, query: str, *, exact: bool) -> Sequence[str]:
        params = {"query": query, "exact": "true" if exact else "false"}
        response = asyncio.run(self._call("GET", "/addresses", params=params))
        return self._parse(SearchResponse, response).addresses

    async def _call(
        self,
        method: str,
        path: str,
        *,
        json: object = None,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        async with self.client_factory(self.config.resilience, self.limiter) as client:
            try:
                response = await client.request(
                    method, self.config.base_url + path, json=json, params=params
                )
            except httpx.HTTPError as exc:
                raise IpamBackendError(f"{method} {path} failed: {exc}") from exc
        if response.is_error:
            raise IpamApiError(_error_message(response), status_code=response.status_code)
        return response

    @staticmethod
    def _parse[TModel: AssignResponse | SearchResponse](
        model: type[TModel], response: httpx.Response
    ) -> TModel:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise IpamBackendError(f"unexpected IPAM response payload: {exc}") from exc


def _error_message(response: httpx.Response) -> str:
    prefix = f"IPAM service returned {response.status_code}"
    try:
        payload = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return prefix
    return f"{prefix}: {payload.error}"


if TYPE_CHECKING:
    _backend_check: IpamBackend = HttpIpamBackend()
