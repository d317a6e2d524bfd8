"""
Configuration Module

Settings are read from environment variables through Pydantic, constructed once
by the command line entry point and passed to the components that need them.
"""

from typing import Optional
import logging

import aiohttp
from pydantic import Field
from pydantic_settings import BaseSettings

from social.graze.nostr.resolve.nip05 import WELL_KNOWN_PATH


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Runtime settings for the key tools.

    Values are loaded from environment variables of the same name, for example
    DEBUG=true or SENTRY_DSN=... .
    """

    debug: bool = False
    """
    Enable verbose logging, including a trace of every HTTP request.
    Set with DEBUG environment variable.
    """

    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    well_known_path: str = WELL_KNOWN_PATH
    """
    Path of the NIP-05 document on each domain.
    Set with WELL_KNOWN_PATH environment variable.
    """

    request_timeout: Optional[float] = Field(default=None, gt=0)
    """
    Total timeout in seconds for each nostr.json request. Unset means requests
    are never timed out.
    Set with REQUEST_TIMEOUT environment variable.
    """

    user_agent: str = "graze-nostr-keys"
    """User-Agent header sent with NIP-05 requests."""


def create_client_session(settings: Settings) -> aiohttp.ClientSession:
    """Build the HTTP session shared by every resolution task."""
    trace_config = aiohttp.TraceConfig()

    if settings.debug:

        async def on_request_start(
            session, trace_config_ctx, params: aiohttp.TraceRequestStartParams
        ):
            logger.debug("Starting request: %s %s", params.method, params.url)

        async def on_request_end(
            session, trace_config_ctx, params: aiohttp.TraceRequestEndParams
        ):
            logger.debug(
                "Ending request: %s %s %s",
                params.method,
                params.url,
                params.response.status,
            )

        trace_config.on_request_start.append(on_request_start)
        trace_config.on_request_end.append(on_request_end)

    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=settings.request_timeout),
        headers={"User-Agent": settings.user_agent},
        trace_configs=[trace_config],
    )
