"""NIP-05 identity resolution.

Fetches ``https://{domain}/.well-known/nostr.json`` for each domain and
converts the hex public keys in its ``names`` object into npubs. Domains are
resolved concurrently and each domain's outcome is kept separate.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import aiohttp
from aiohttp import ClientSession
from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError
import sentry_sdk

from social.graze.nostr.errors import FetchError, KeyFormatError
from social.graze.nostr.keys.codec import encode_from_hex
from social.graze.nostr.keys.prefix import Prefix

logger = logging.getLogger(__name__)

WELL_KNOWN_PATH = "/.well-known/nostr.json"


class IdentityDocument(BaseModel):
    """Parsed nostr.json document.

    Other top-level members such as ``relays`` are ignored.
    """

    model_config = ConfigDict(frozen=True)

    names: Dict[StrictStr, StrictStr]


class DomainResolution(BaseModel):
    """Outcome of resolving a single domain.

    Exactly one of ``lines`` (on success) or ``error`` is meaningful.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    domain: str
    lines: List[str] = []
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> List[str]:
        if self.error is not None:
            return [f"{self.domain} error: {self.error.reason}"]
        return list(self.lines)


def nip05_url(domain: str, well_known_path: str = WELL_KNOWN_PATH) -> str:
    return f"https://{domain}{well_known_path}"


async def fetch_identity_document(
    session: ClientSession, domain: str, well_known_path: str = WELL_KNOWN_PATH
) -> IdentityDocument:
    """Fetch and parse a domain's nostr.json.

    Args:
        session: HTTP client session
        domain: Already validated domain
        well_known_path: Path of the document on the domain

    Returns:
        IdentityDocument for the domain

    Raises:
        FetchError: On transport failure, non-2xx status, an unreadable or
            invalid JSON body, or a document without a string to string ``names`` object
    """
    url = nip05_url(domain, well_known_path)
    logger.debug("Fetching %s", url)

    body: Any = None
    try:
        async with session.get(url) as resp:
            status = resp.status
            if 200 <= status < 300:
                body = await resp.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        sentry_sdk.capture_exception(e)
        raise FetchError(domain, f"request failed: {e}") from e
    except ValueError as e:
        raise FetchError(domain, "response is not valid JSON") from e
    except Exception as e:
        sentry_sdk.capture_exception(e)
        raise FetchError(domain, f"unreadable response: {type(e).__name__}") from e

    if not 200 <= status < 300:
        raise FetchError(domain, f"unexpected status {status}")

    try:
        return IdentityDocument.model_validate(body)
    except ValidationError as e:
        raise FetchError(
            domain, "document does not map names to hex public keys"
        ) from e


def render_identities(
    domain: str, document: IdentityDocument, emit_stats: bool = False
) -> List[str]:
    """Convert every name in a document to an output line.

    A name whose key cannot be encoded gets an inline error line and the
    remaining names are still converted.
    """
    lines: List[str] = []
    for name, hex_key in document.names.items():
        try:
            npub = encode_from_hex(Prefix.public_key, hex_key)
        except KeyFormatError as e:
            logger.warning("Unable to encode key for %s@%s: %s", name, domain, e)
            lines.append(f"{name}@{domain} error: {e}")
            continue
        lines.append(f"{name}@{domain} {npub}")

    if emit_stats:
        lines.append(f"domain={domain}|count={len(document.names)}")

    return lines


class IdentityResolver:
    """Resolves NIP-05 documents over an injected HTTP session."""

    def __init__(
        self, session: ClientSession, well_known_path: str = WELL_KNOWN_PATH
    ) -> None:
        self.session = session
        self.well_known_path = well_known_path

    async def resolve(self, domain: str) -> IdentityDocument:
        return await fetch_identity_document(
            self.session, domain, self.well_known_path
        )

    async def resolve_domain(
        self, domain: str, emit_stats: bool = False
    ) -> DomainResolution:
        """Resolve one domain, capturing a fetch failure as its result."""
        try:
            document = await self.resolve(domain)
        except FetchError as e:
            logger.warning("Unable to resolve %s: %s", domain, e.reason)
            return DomainResolution(domain=domain, error=e)
        return DomainResolution(
            domain=domain, lines=render_identities(domain, document, emit_stats)
        )

    async def resolve_all(
        self, domains: Sequence[str], emit_stats: bool = False
    ) -> List[DomainResolution]:
        """Resolve all domains concurrently, one task per domain.

        Results are returned in the order the domains were supplied, whatever
        order the fetches complete in.
        """
        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(self.resolve_domain(domain, emit_stats))
                for domain in domains
            ]
        return [task.result() for task in tasks]
