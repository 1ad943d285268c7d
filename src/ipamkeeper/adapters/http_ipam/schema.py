"""Pydantic models describing the IPAM service payloads."""

from __future__ import annotations

import ipaddress

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validate_address(value: str) -> str:
    try:
        ipaddress.ip_address(value)
    except ValueError as exc:
        raise ValueError(f"not an IP address: {value!r}") from exc
    return value


class IpamBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AssignRequest(IpamBaseModel):
    name: str


class AssignResponse(IpamBaseModel):
    address: str

    _check_address = field_validator("address")(_validate_address)


class SearchResponse(IpamBaseModel):
    addresses: list[str] = Field(default_factory=list)

    @field_validator("addresses")
    @classmethod
    def _check_addresses(cls, value: list[str]) -> list[str]:
        return [_validate_address(item) for item in value]


class ErrorResponse(IpamBaseModel):
    error: str = Field(alias="message")
    code: str | None = None
