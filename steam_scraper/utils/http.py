from __future__ import annotations

import asyncio
from typing import Dict, Optional
from aiohttp import ClientSession, ClientTimeout
import aiohttp
import logging

from bs4 import BeautifulSoup

from ..errors import NetworkError
from .parsing import make_soup

logger = logging.getLogger(__name__)


async def fetch_text(
    session: ClientSession,
    url: str,
    *,
    timeout: float = 15.0,
    user_agent: Optional[str] = None,
    cookies: Optional[Dict[str, str]] = None,
) -> str:
    """
    Fetch a URL and return body text. Raises NetworkError on transport
    failure, timeout, or any status other than 200. No retries.
    """
    headers = {}
    if user_agent:
        headers["User-Agent"] = user_agent
    if cookies:
        headers["Cookie"] = "; ".join(f"{k}={v}" for k, v in cookies.items())

    try:
        async with session.get(url, headers=headers, timeout=ClientTimeout(total=timeout)) as resp:
            if resp.status != 200:
                raise NetworkError(f"HTTP request failed with status code: {resp.status}", status=resp.status)
            # Undecodable bytes are replaced so one bad byte does not lose the page.
            return await resp.text(errors="replace")
    except asyncio.TimeoutError as exc:
        raise NetworkError(f"Request to {url} timed out after {timeout}s") from exc
    except aiohttp.ClientError as exc:
        raise NetworkError(f"Failed to make HTTP request to {url}: {exc}") from exc


def create_session() -> ClientSession:
    """
    Create an aiohttp ClientSession.
    """
    # Note: caller is responsible for closing the session (await session.close()).
    return aiohttp.ClientSession()


class PageFetcher:
    """
    Blocking fetch collaborator for the interactive session.
    Each call runs one request to completion; nothing else is in flight.
    """

    def __init__(self, *, timeout: float = 15.0, user_agent: Optional[str] = None) -> None:
        self.timeout = timeout
        self.user_agent = user_agent

    def get_text(self, url: str, cookies: Optional[Dict[str, str]] = None) -> str:
        return asyncio.run(self._get_text(url, cookies))

    def get_document(self, url: str, cookies: Optional[Dict[str, str]] = None) -> BeautifulSoup:
        """Fetch and parse a page; raises NetworkError or ParseError."""
        html = self.get_text(url, cookies)
        logger.debug("Fetched %s (%d chars)", url, len(html))
        return make_soup(html)

    async def _get_text(self, url: str, cookies: Optional[Dict[str, str]]) -> str:
        session = create_session()
        try:
            return await fetch_text(
                session,
                url,
                timeout=self.timeout,
                user_agent=self.user_agent,
                cookies=cookies,
            )
        finally:
            await session.close()
