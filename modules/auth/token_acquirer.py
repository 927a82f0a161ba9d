"""
Spotify 토큰 발급 모듈 - client credentials grant
"""

import json
from typing import Optional

from models.keyword_result import AccessToken
from utils.exceptions import AuthRejected, InvalidCredentials
from utils.http_client import AsyncHTTPClient
from utils.logger import get_logger
from config.settings import settings

logger = get_logger()


class TokenAcquirer:
    """Client ID / Secret을 Bearer 토큰으로 교환하는 클래스"""

    def __init__(self, token_url: Optional[str] = None, timeout: Optional[int] = None):
        self.token_url = token_url or settings.SPOTIFY_TOKEN_URL
        self.timeout = timeout or settings.REQUEST_TIMEOUT

    async def request_token(
        self,
        client_id: str,
        client_secret: str,
        client: Optional[AsyncHTTPClient] = None,
    ) -> AccessToken:
        """
        토큰 발급 요청 (재시도 없음)

        Args:
            client_id: Spotify Client ID
            client_secret: Spotify Client Secret
            client: 주입할 HTTP 클라이언트 (없으면 새로 생성)

        Returns:
            AccessToken

        Raises:
            InvalidCredentials: 입력값이 비어 있음 (네트워크 호출 전)
            AuthRejected: 토큰 엔드포인트가 실패 응답을 반환
        """
        client_id = (client_id or "").strip()
        client_secret = (client_secret or "").strip()

        missing = []
        if not client_id:
            missing.append("client_id")
        if not client_secret:
            missing.append("client_secret")
        if missing:
            raise InvalidCredentials(missing)

        logger.info("토큰 요청 중...")

        if client is not None:
            response = await self._post_credentials(client, client_id, client_secret)
        else:
            async with AsyncHTTPClient(
                timeout=self.timeout,
                user_agent=settings.USER_AGENT,
            ) as own_client:
                response = await self._post_credentials(own_client, client_id, client_secret)

        return self._parse_token_response(response)

    async def _post_credentials(self, client: AsyncHTTPClient, client_id: str, client_secret: str) -> dict:
        """토큰 엔드포인트 호출 (form-urlencoded)"""
        return await client.post(
            self.token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": client_id,
                "client_secret": client_secret,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

    def _parse_token_response(self, response: dict) -> AccessToken:
        """토큰 응답 파싱"""
        status = response.get("status", 0)

        if status == 0:
            logger.error(f"토큰 요청 실패: {response.get('error')}")
            raise AuthRejected(0, response.get("error"))

        if not 200 <= status < 300:
            logger.error(f"토큰 발급 거부: status={status}")
            raise AuthRejected(status)

        try:
            data = json.loads(response.get("text") or "{}")
        except json.JSONDecodeError as e:
            raise AuthRejected(status, f"invalid token response: {e}") from e
        if not isinstance(data, dict):
            raise AuthRejected(status, "invalid token response")

        access_token = data.get("access_token")
        if not access_token:
            raise AuthRejected(status, "access_token missing from response")

        try:
            expires_in = int(data.get("expires_in", 0) or 0)
        except (TypeError, ValueError) as e:
            raise AuthRejected(status, f"invalid expires_in: {e}") from e

        token = AccessToken(
            access_token=access_token,
            expires_in=expires_in,
            token_type=data.get("token_type", "Bearer"),
        )
        logger.info(f"토큰 발급 완료 (만료까지 {token.expires_in_minutes}분)")
        return token
