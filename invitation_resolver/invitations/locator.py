"""Locate the base64 invitation block carried by an invitation URL."""

import asyncio
import logging
from typing import Optional
from urllib.parse import parse_qsl, urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout

from .message_types import INVITATION_PARAMS

LOGGER = logging.getLogger(__name__)

REDIRECT_CODES = (300, 301, 302, 303, 307, 308)


def parse_url(url: str):
    """Split an absolute http(s) URL, or return None if it is not one."""
    try:
        parts = urlsplit(url or "")
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    if parts.scheme in ("http", "https") and parts.hostname:
        return parts
    return None


class InvitationLocator:
    """Find an invitation block in a URL, following at most one redirect."""

    def __init__(self, session: ClientSession, *, request_timeout: float = 10.0):
        """
        Initialize the locator.

        Args:
            session: a long-lived HTTP client session, owned by the caller
            request_timeout: the redirect probe timeout, in seconds
        """
        self._session = session
        self._timeout = ClientTimeout(total=request_timeout)

    @staticmethod
    def locate_direct(url: str) -> Optional[str]:
        """
        Return the first non-empty invitation query parameter of a URL.

        Parameters are checked in the order `c_i`, `d_m`, `oob`. The URL is
        expected to be percent-decoded already, so `+` is kept as a base64
        character rather than read as an encoded space.
        """
        parts = parse_url(url)
        if not parts:
            return None
        query = {}
        for name, value in parse_qsl(parts.query.replace("+", "%2B")):
            query.setdefault(name, value)
        for name in INVITATION_PARAMS:
            if query.get(name):
                return query[name]
        return None

    async def locate_via_redirect(self, url: str) -> Optional[str]:
        """
        Probe the URL once and look for an invitation in its redirect target.

        The redirect target itself is never fetched. Any failure along the way
        means no invitation was found.
        """
        try:
            async with self._session.get(
                url, allow_redirects=False, timeout=self._timeout
            ) as response:
                if response.status not in REDIRECT_CODES:
                    LOGGER.debug(
                        "No redirect from %s: status %s", url, response.status
                    )
                    return None
                location = response.headers.get("Location")
        except (ClientError, asyncio.TimeoutError, ValueError) as err:
            LOGGER.error("Error probing invitation url %s: %s", url, err)
            return None

        if not parse_url(location):
            LOGGER.error("Invalid redirect location from %s: %s", url, location)
            return None
        LOGGER.info("Invitation url %s redirects to %s", url, location)
        return self.locate_direct(location)

    async def locate(self, url: str) -> Optional[str]:
        """Look for the block in the URL itself, then behind one redirect."""
        return self.locate_direct(url) or await self.locate_via_redirect(url)
