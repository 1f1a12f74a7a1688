from __future__ import annotations

from enum import Enum
from typing import Callable

import httpx
import pytest

from dotmailer_api import ApiModel, DotmailerClient

BASE_URL = "https://api.example.test"


class OptInType(Enum):
    Unknown = 0
    Single = 1
    Double = 2
    VerifiedDouble = 3


class Contact(ApiModel):
    email: str
    opt_in_type: OptInType = OptInType.Unknown
    id: int | None = None


class AddressBook(ApiModel):
    name: str
    id: int | None = None


class Status(Enum):
    Active = 1
    Suspended = 2


class Account(ApiModel):
    id: int
    status: Status
    previous: list[Status] = []
    by_region: dict[str, Status] = {}
    pending: Status | None = None


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def make_client() -> Callable[[Handler], DotmailerClient]:
    def _make(handler: Handler) -> DotmailerClient:
        return DotmailerClient(
            "apiuser-1@apiconnector.com",
            "s3cret",
            BASE_URL,
            transport=httpx.MockTransport(handler),
        )

    return _make
