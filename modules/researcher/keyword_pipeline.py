"""
키워드 리서치 파이프라인 - Spotify 검색 API 순차 조회
키워드별로 공급(검색 결과 수), 평균 인기도, 추정 수요 점수를 계산하고
이전 실행 결과와 비교해 트렌드 변화량을 산출합니다.
"""

import asyncio
import inspect
import json
from datetime import date
from typing import Any, Callable, Iterable, Optional, Union

from models.keyword_result import (
    AccessToken,
    KeywordResult,
    RunOutcome,
    RunSnapshot,
    round_half_up,
)
from utils.exceptions import KeywordFetchFailed, MissingToken, NoKeywords, TokenExpired
from utils.http_client import AsyncHTTPClient
from utils.logger import get_logger
from config.settings import settings

logger = get_logger()

DEFAULT_POPULARITY = 50
MAX_DEMAND_SCORE = 100

# (진행률 0.0~1.0, 현재까지의 스냅샷) - 동기/비동기 함수 모두 허용
ProgressCallback = Callable[[float, RunSnapshot], Any]


def parse_keywords(raw: Union[str, Iterable[str]]) -> list[str]:
    """줄 단위로 분리 → 공백 제거 → 빈 줄 제외"""
    if isinstance(raw, str):
        lines = raw.split("\n")
    else:
        lines = [line for chunk in raw for line in str(chunk).split("\n")]
    return [line.strip() for line in lines if line.strip()]


def average_popularity(items: list) -> int:
    """아이템 인기도 평균 (인기도 없는 아이템은 50, 아이템이 없으면 50)"""
    if not items:
        return DEFAULT_POPULARITY
    total = 0
    for item in items:
        popularity = item.get("popularity") if isinstance(item, dict) else None
        total += DEFAULT_POPULARITY if popularity is None else popularity
    return round_half_up(total / len(items))


def estimate_demand(item_count: int) -> int:
    """카탈로그 규모 기반 수요 추정치 (0~100)"""
    return min(MAX_DEMAND_SCORE, round_half_up(item_count / 5))


class KeywordResearchPipeline:
    """키워드 목록을 한 번에 하나씩 검색하여 RunSnapshot을 만드는 클래스"""

    def __init__(
        self,
        search_url: Optional[str] = None,
        search_type: Optional[str] = None,
        limit: Optional[int] = None,
        throttle_delay: Optional[float] = None,
        timeout: Optional[int] = None,
    ):
        self.search_url = search_url or settings.SPOTIFY_SEARCH_URL
        self.search_type = search_type or settings.SEARCH_TYPE
        self.limit = limit or settings.SEARCH_LIMIT
        self.throttle_delay = settings.THROTTLE_DELAY if throttle_delay is None else throttle_delay
        self.timeout = timeout or settings.REQUEST_TIMEOUT

    async def run(
        self,
        keywords: Union[str, Iterable[str]],
        access_token: Union[str, AccessToken, None],
        previous: Optional[RunSnapshot] = None,
        on_progress: Optional[ProgressCallback] = None,
        client: Optional[AsyncHTTPClient] = None,
    ) -> RunOutcome:
        """
        키워드 리서치 실행

        Args:
            keywords: 줄바꿈으로 구분된 키워드 문자열 또는 키워드 목록
            access_token: Bearer 토큰
            previous: 이전 실행 스냅샷 (변화량 계산용)
            on_progress: 키워드 1개 완료 시마다 호출되는 콜백
            client: 주입할 HTTP 클라이언트 (없으면 새로 생성)

        Returns:
            RunOutcome. 401로 중단된 경우 token_expired=True
        """
        token = access_token.access_token if isinstance(access_token, AccessToken) else access_token
        if not token or not token.strip():
            raise MissingToken()

        keyword_list = parse_keywords(keywords)
        if not keyword_list:
            raise NoKeywords()

        previous = previous or RunSnapshot()
        outcome = RunOutcome(snapshot=RunSnapshot(), keyword_count=len(keyword_list))

        logger.info(f"키워드 리서치 시작: {len(keyword_list)}개 키워드")

        if client is not None:
            await self._run_loop(client, keyword_list, token.strip(), previous, outcome, on_progress)
        else:
            async with AsyncHTTPClient(
                timeout=self.timeout,
                user_agent=settings.USER_AGENT,
            ) as own_client:
                await self._run_loop(own_client, keyword_list, token.strip(), previous, outcome, on_progress)

        if outcome.token_expired:
            logger.error(
                f"토큰 만료로 리서치 중단: {len(outcome.snapshot)}/{len(keyword_list)}개 처리됨"
            )
        else:
            failed = sum(1 for r in outcome.snapshot if not r.is_ok)
            logger.info(f"키워드 리서치 완료: {len(outcome.snapshot)}개 결과 (실패 {failed}개)")
        return outcome

    async def run_or_raise(self, *args, **kwargs) -> RunOutcome:
        """run()과 같지만 토큰 만료 시 TokenExpired를 발생시킴"""
        outcome = await self.run(*args, **kwargs)
        if outcome.token_expired:
            raise TokenExpired(outcome)
        return outcome

    async def _run_loop(
        self,
        client: AsyncHTTPClient,
        keyword_list: list[str],
        token: str,
        previous: RunSnapshot,
        outcome: RunOutcome,
        on_progress: Optional[ProgressCallback],
    ) -> None:
        """키워드 순차 처리 루프"""
        today = date.today()
        total = len(keyword_list)

        for index, keyword in enumerate(keyword_list):
            try:
                data = await self._search(client, keyword, token)
                result = self._build_result(keyword, data, previous, today)
            except TokenExpired:
                outcome.token_expired = True
                return
            except KeywordFetchFailed as e:
                logger.warning(f"키워드 '{keyword}' 검색 실패: {e}")
                result = KeywordResult.failed(keyword, str(e), captured_at=today)
            else:
                logger.info(
                    f"'{keyword}': {result.item_count}개, 인기도 {result.avg_popularity_score}, "
                    f"수요 {result.estimated_demand_score}"
                )

            outcome.snapshot.append(result)
            outcome.progress = (index + 1) / total
            await self._publish_progress(on_progress, outcome)

            # 실패한 키워드는 딜레이 없이 다음으로 진행
            if result.is_ok and index < total - 1:
                await asyncio.sleep(self.throttle_delay)

    async def _search(self, client: AsyncHTTPClient, keyword: str, token: str) -> dict:
        """Spotify 검색 API 호출 → audiobooks 섹션 반환"""
        response = await client.get(
            self.search_url,
            params={
                "q": keyword,
                "type": self.search_type,
                "limit": self.limit,
            },
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
        )

        status = response.get("status", 0)
        if status == 401:
            raise TokenExpired()
        if status == 0:
            raise KeywordFetchFailed(keyword, 0, response.get("error") or "request failed")
        if not 200 <= status < 300:
            raise KeywordFetchFailed(keyword, status)

        try:
            data = json.loads(response.get("text") or "{}")
        except json.JSONDecodeError as e:
            raise KeywordFetchFailed(keyword, status, f"Invalid JSON response: {e}") from e

        section = data.get(f"{self.search_type}s") if isinstance(data, dict) else None
        return section if isinstance(section, dict) else {}

    def _build_result(
        self,
        keyword: str,
        data: dict,
        previous: RunSnapshot,
        today: date,
    ) -> KeywordResult:
        """검색 응답에서 지표 계산 및 이전 실행 대비 변화량 산출"""
        items = data.get("items") or []
        try:
            item_count = int(data.get("total") or 0)
            avg_popularity = average_popularity(items)
        except (TypeError, ValueError) as e:
            raise KeywordFetchFailed(keyword, 200, f"Invalid response: {e}") from e
        demand = estimate_demand(item_count)

        # 이전 실행에서 실패한 키워드는 비교 대상이 아님
        prior = previous.find(keyword)
        if prior is not None and not prior.is_ok:
            prior = None
        popularity_delta = avg_popularity - prior.avg_popularity_score if prior else 0
        supply_delta = item_count - prior.item_count if prior else 0

        return KeywordResult(
            keyword=keyword,
            item_count=item_count,
            avg_popularity_score=avg_popularity,
            estimated_demand_score=demand,
            popularity_delta=popularity_delta,
            supply_delta=supply_delta,
            captured_at=today,
        )

    async def _publish_progress(self, on_progress: Optional[ProgressCallback], outcome: RunOutcome) -> None:
        """진행률 콜백 호출"""
        if on_progress is None:
            return
        ret = on_progress(outcome.progress, outcome.snapshot)
        if inspect.isawaitable(ret):
            await ret
