"""
HTTP client for the halal certification register.
"""
from typing import Any, List, Optional
from aiohttp import ClientSession, ClientTimeout
from loguru import logger

from halalmatch.config import REGISTER_URL, LOAD_TIMEOUT


class RegisterClient:
    """
    Client for fetching the certification register over HTTP.
    Construct one per process and share it; the aiohttp session is created lazily.
    """

    def __init__(self, url: str = REGISTER_URL, timeout: float = LOAD_TIMEOUT):
        self.url = url
        self.timeout = timeout
        self._session: Optional[ClientSession] = None

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=self.timeout))
        return self._session

    async def fetch_register(self) -> List[Any]:
        """
        GET the register and return the decoded JSON body.

        Raises:
            aiohttp.ClientResponseError: On a non-success status.
            aiohttp.ClientError: On connection failures.
            ValueError: If the body is not valid JSON.
        """
        session = await self._get_session()
        headers = {"Accept": "application/json", "User-Agent": "Mozilla/5.0"}

        try:
            async with session.get(self.url, headers=headers) as resp:
                resp.raise_for_status()
                # raw.githubusercontent.com serves JSON as text/plain
                return await resp.json(content_type=None)
        except Exception as e:
            logger.debug(f"⚠️ Register GET request failed: {e}")
            raise

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
