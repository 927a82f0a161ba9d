"""
비동기 HTTP 클라이언트 (aiohttp 기반)
타임아웃 지원, 재시도 없음 (실패는 호출자가 기록)
"""

import asyncio
import aiohttp
from utils.logger import get_logger

logger = get_logger()


class AsyncHTTPClient:
    """비동기 HTTP 클라이언트"""

    def __init__(
        self,
        timeout: int = 30,
        user_agent: str = "",
    ):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.user_agent = user_agent
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self):
        headers = {}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        self._session = aiohttp.ClientSession(
            timeout=self.timeout,
            headers=headers,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._session:
            await self._session.close()

    async def get(self, url: str, **kwargs) -> dict:
        """GET 요청"""
        return await self._request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> dict:
        """POST 요청"""
        return await self._request("POST", url, **kwargs)

    async def _request(self, method: str, url: str, **kwargs) -> dict:
        """HTTP 요청 실행 (단일 시도)"""
        try:
            async with self._session.request(method, url, **kwargs) as resp:
                text = await resp.text()
                return {
                    "status": resp.status,
                    "text": text,
                    "url": str(resp.url),
                    "headers": dict(resp.headers),
                }
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"요청 실패: {method} {url} - {e!r}")
            return {"status": 0, "text": "", "url": url, "error": str(e) or type(e).__name__}
