"""
Small async client for the FreeCal API, used by scripts and integration checks.

Hosted instances sleep when idle, so the first request after a pause can time
out while the server cold-starts. Requests that time out are retried with
exponential backoff; any other failure is raised straight away.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

logger = logging.getLogger('freecal.client')

MAX_ATTEMPTS = 3
BASE_DELAY = 1.0
MAX_DELAY = 5.0


def backoff_delay(attempt: int, base: float = BASE_DELAY, cap: float = MAX_DELAY) -> float:
    """Delay before retry number ``attempt`` (0-based)."""
    return min(base * (2 ** attempt), cap)


def normalize_base_url(url: str) -> str:
    url = url.rstrip('/')
    if not url.endswith('/api'):
        url = f'{url}/api'
    return url


class FreeCalClient:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        max_attempts: int = MAX_ATTEMPTS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.base_url = normalize_base_url(base_url)
        self.token = token
        self.max_attempts = max_attempts
        self._sleep = sleep
        self._http = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def close(self):
        await self._http.aclose()

    def _headers(self) -> dict:
        headers = {'Content-Type': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        for attempt in range(self.max_attempts):
            try:
                return await self._http.request(method, path, headers=self._headers(), **kwargs)
            except httpx.TimeoutException as e:
                if attempt == self.max_attempts - 1:
                    logger.error({'msg': 'request_failed', 'method': method, 'path': path, 'attempts': attempt + 1})
                    raise
                delay = backoff_delay(attempt)
                logger.warning({'msg': 'request_timeout_retry', 'path': path, 'attempt': attempt + 1, 'delay': delay, 'error': str(e)})
                await self._sleep(delay)

    async def request_json(self, method: str, path: str, **kwargs) -> Any:
        response = await self.request(method, path, **kwargs)
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def login(self, email: str, password: str) -> dict:
        data = await self.request_json('POST', '/auth/login', json={'email': email, 'password': password})
        self.token = data['token']
        return data['user']

    async def me(self) -> dict:
        return await self.request_json('GET', '/auth/me')

    async def events(self) -> list:
        return await self.request_json('GET', '/events')

    async def create_event(self, event: dict) -> dict:
        return await self.request_json('POST', '/events', json=event)

    async def relationships(self, status: Optional[str] = None) -> list:
        params = {'status': status} if status else None
        return await self.request_json('GET', '/relationships', params=params)

    async def health(self) -> dict:
        """GET /health lives outside the /api prefix."""
        response = await self._http.get(self.base_url[:-len('/api')] + '/health')
        response.raise_for_status()
        return response.json()
