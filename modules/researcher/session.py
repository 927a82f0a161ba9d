"""
리서치 세션 - 현재 토큰과 이전 실행 스냅샷을 명시적으로 보관
"""

from typing import Iterable, Optional, Union

from models.keyword_result import AccessToken, RunOutcome, RunSnapshot
from modules.auth.token_acquirer import TokenAcquirer
from modules.researcher.keyword_pipeline import KeywordResearchPipeline, ProgressCallback
from utils.exceptions import MissingToken, TokenExpired
from utils.logger import get_logger

logger = get_logger()


class ResearchSession:
    """토큰 발급 → 리서치 반복 실행을 관리하는 세션"""

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        acquirer: Optional[TokenAcquirer] = None,
        pipeline: Optional[KeywordResearchPipeline] = None,
        previous: Optional[RunSnapshot] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.acquirer = acquirer or TokenAcquirer()
        self.pipeline = pipeline or KeywordResearchPipeline()
        self.token: Optional[AccessToken] = None
        self.previous: RunSnapshot = previous or RunSnapshot()

    @property
    def has_token(self) -> bool:
        return self.token is not None and not self.token.is_expired()

    async def request_token(self) -> AccessToken:
        """세션의 자격 증명으로 토큰 발급"""
        self.token = await self.acquirer.request_token(self.client_id, self.client_secret)
        return self.token

    async def research(
        self,
        keywords: Union[str, Iterable[str]],
        on_progress: Optional[ProgressCallback] = None,
    ) -> RunOutcome:
        """
        저장된 토큰과 이전 스냅샷으로 리서치 실행.
        결과 스냅샷은 다음 실행의 이전 스냅샷이 됨 (병합하지 않고 교체).

        Raises:
            MissingToken: 토큰이 없음
            TokenExpired: 검색 도중 401 응답 (세션 토큰은 폐기됨)
        """
        if not self.has_token:
            raise MissingToken()

        outcome = await self.pipeline.run(
            keywords,
            self.token,
            previous=self.previous,
            on_progress=on_progress,
        )
        self.previous = outcome.snapshot

        if outcome.token_expired:
            logger.warning("세션 토큰 폐기 - 새 토큰을 요청하세요")
            self.token = None
            raise TokenExpired(outcome)

        return outcome
