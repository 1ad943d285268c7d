"""The IP address resource under reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar
from uuid import uuid4


def new_uid() -> str:
    return str(uuid4())


@dataclass(frozen=True, slots=True)
class IpAddressSpec:
    """Desired state, owned by whoever created the resource."""

    name: str | None = None
    ref: str | None = None

    @property
    def is_reference(self) -> bool:
        return bool(self.ref)


@dataclass(frozen=True, slots=True)
class IpAddressStatus:
    """Observed state, written only by the reconciler."""

    address: str | None = None
    name: str | None = None
    provider: str | None = None

    @property
    def is_assigned(self) -> bool:
        return bool(self.address)


@dataclass(frozen=True, slots=True)
class IpAddressKey:
    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}-{self.name}"


@dataclass(frozen=True, kw_only=True)
class IpAddress:
    """An ``IpAddress`` resource as seen by one handler invocation.

    ``version`` is the store's resource version. Status updates are only
    accepted when it still matches the stored row.
    """

    KIND: ClassVar[str] = "IpAddress"
    API_VERSION: ClassVar[str] = "v1"

    namespace: str
    name: str
    spec: IpAddressSpec = field(default_factory=IpAddressSpec)
    status: IpAddressStatus = field(default_factory=IpAddressStatus)
    uid: str = field(default_factory=new_uid)
    version: int = 1

    @property
    def key(self) -> IpAddressKey:
        return IpAddressKey(namespace=self.namespace, name=self.name)

    def with_status(self, status: IpAddressStatus) -> IpAddress:
        return replace(self, status=status)
