"""
기회 점수 산출 및 요약 통계 모듈
"""

from dataclasses import dataclass
from typing import Optional

from models.keyword_result import KeywordResult, RunSnapshot, round_half_up
from utils.logger import get_logger
from config.settings import settings

logger = get_logger()

# 점수를 계산할 수 없는 결과(실패)의 정렬용 대체값
UNDEFINED_SCORE = -1


@dataclass
class RunSummary:
    """스냅샷 요약 통계"""

    keyword_count: int
    valid_count: int
    failed_count: int
    total_supply: int
    avg_popularity: int

    def to_dict(self) -> dict:
        return {
            "keyword_count": self.keyword_count,
            "valid_count": self.valid_count,
            "failed_count": self.failed_count,
            "total_supply": self.total_supply,
            "avg_popularity": self.avg_popularity,
        }


def opportunity_score(result: KeywordResult) -> Optional[int]:
    """
    기회 점수 = 수요 / (공급 + 1) * 100
    수요가 높고 공급이 적을수록 높음. 실패한 결과는 None
    """
    if not result.is_ok:
        return None
    return round_half_up(result.estimated_demand_score / (result.item_count + 1) * 100)


def summarize(snapshot: RunSnapshot) -> RunSummary:
    """유효 결과 수, 총 공급량, 평균 인기도 계산"""
    ok_results = [r for r in snapshot if r.is_ok]
    total_supply = sum(r.item_count for r in snapshot if r.item_count > 0)

    if ok_results:
        avg_popularity = round_half_up(
            sum(r.avg_popularity_score for r in ok_results) / len(ok_results)
        )
    else:
        avg_popularity = 0

    return RunSummary(
        keyword_count=len(snapshot),
        valid_count=len(ok_results),
        failed_count=len(snapshot) - len(ok_results),
        total_supply=total_supply,
        avg_popularity=avg_popularity,
    )


def rank_by_opportunity(snapshot: RunSnapshot) -> list[KeywordResult]:
    """기회 점수 내림차순 정렬 (안정 정렬, 실패 결과는 맨 뒤)"""
    def sort_key(result: KeywordResult) -> int:
        score = opportunity_score(result)
        return UNDEFINED_SCORE if score is None else score

    return sorted(snapshot, key=sort_key, reverse=True)


def top_opportunities(snapshot: RunSnapshot, limit: Optional[int] = None) -> list[KeywordResult]:
    """상위 기회 키워드 (성공 결과만)"""
    limit = settings.TOP_OPPORTUNITIES if limit is None else limit
    ranked = [r for r in rank_by_opportunity(snapshot) if r.is_ok]
    top = ranked[:limit]
    logger.debug(f"상위 기회 키워드 {len(top)}개 선정")
    return top


def opportunity_matrix(snapshot: RunSnapshot) -> list[dict]:
    """공급-수요 매트릭스 데이터 (x=공급, y=수요, size=인기도*2)"""
    return [
        {
            "keyword": r.keyword,
            "x": r.item_count,
            "y": r.estimated_demand_score,
            "size": r.avg_popularity_score * 2,
        }
        for r in snapshot
        if r.is_ok
    ]
