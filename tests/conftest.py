"""
Shared test configuration and fixtures.

Provides canned key material and helpers for building mocked aiohttp sessions
that serve nostr.json documents per domain.
"""

import asyncio
from typing import Any, Callable, Dict, Optional
from unittest.mock import AsyncMock

import pytest
from aiohttp import ClientResponse, ClientSession


# NIP-19 reference key
HEX_PUBKEY = "3bf0c63fcb93463407af97a5e5ee64fa883d107ef9e558472c4eb9aaaefa459d"
NPUB = "npub180cvv07tjdrrgpa0j7j7tmnyl2yr6yr7l8j4s3evf6u64th6gkwsyjh6w6"

OTHER_HEX_PUBKEY = "7e7e9c42a91bfef19fa929e5fda1b72e0ebc1a4c1141673e2794234d86addf4e"


class ResponseContext:
    """Stand-in for the context manager returned by ClientSession.get."""

    def __init__(
        self,
        response: Optional[ClientResponse] = None,
        error: Optional[BaseException] = None,
        before_enter: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.response = response
        self.error = error
        self.before_enter = before_enter

    async def __aenter__(self):
        if self.before_enter is not None:
            await self.before_enter()
        if self.error is not None:
            raise self.error
        return self.response

    async def __aexit__(self, exc_type, exc, tb):
        return False


def make_response(status: int = 200, body: Any = None, json_error=None):
    response = AsyncMock(spec=ClientResponse)
    response.status = status
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


def make_session(routes: Dict[str, ResponseContext]):
    """AsyncMock ClientSession whose get() serves contexts keyed by URL."""
    session = AsyncMock(spec=ClientSession)
    session.get.side_effect = lambda url: routes[url]
    session.__aenter__.return_value = session
    session.__aexit__.return_value = False
    return session


@pytest.fixture
def hex_pubkey():
    return HEX_PUBKEY


@pytest.fixture
def npub():
    return NPUB


@pytest.fixture
def document_body():
    """A nostr.json body with three names."""
    return {
        "names": {
            "alice": HEX_PUBKEY,
            "bob": OTHER_HEX_PUBKEY,
            "_": HEX_PUBKEY,
        },
        "relays": {HEX_PUBKEY: ["wss://relay.example.com"]},
    }


@pytest.fixture
def gate():
    """An event that lets one fetch wait until another one has started."""
    return asyncio.Event()
